"""Quality measurement for structural equivalence.

Scores :func:`equivalent` against a labelled set of name pairs so tuned
heuristics can be checked against the reference corpus.  Reconciliation only
reports a discrepancy when two names are *not* equivalent, so the negative
class matters as much as the positive one: specificity and accuracy are
reported next to precision and recall.
"""

from __future__ import annotations

from collections import Counter

from ojmatch.entity_resolution.equivalence import equivalent

# (predicted same unit, labelled same unit) -> confusion-matrix cell
_OUTCOMES = {
    (True, True): "true_positives",
    (True, False): "false_positives",
    (False, True): "false_negatives",
    (False, False): "true_negatives",
}


def _ratio(numerator: int, denominator: int) -> float:
    return numerator / denominator if denominator else 0.0


def compute_equivalence_metrics(ground_truth: list[dict]) -> dict[str, float]:
    """Compare :func:`equivalent` with labelled pairs.

    Parameters
    ----------
    ground_truth:
        Dicts with ``name_a``, ``name_b`` and ``same_unit`` (bool).

    Returns
    -------
    dict
        Confusion-matrix counts (``true_positives``, ``false_positives``,
        ``false_negatives``, ``true_negatives``), ``total_pairs``, and the
        derived ``precision``, ``recall``, ``f1``, ``specificity`` and
        ``accuracy``.  Ratios with an empty denominator are 0.0.
    """
    counts = Counter(
        _OUTCOMES[(equivalent(pair["name_a"], pair["name_b"]), bool(pair["same_unit"]))]
        for pair in ground_truth
    )
    tp = counts["true_positives"]
    fp = counts["false_positives"]
    fn = counts["false_negatives"]
    tn = counts["true_negatives"]

    precision = _ratio(tp, tp + fp)
    recall = _ratio(tp, tp + fn)

    return {
        "precision": precision,
        "recall": recall,
        "f1": _ratio(2 * tp, 2 * tp + fp + fn),
        "specificity": _ratio(tn, tn + fp),
        "accuracy": _ratio(tp + tn, len(ground_truth)),
        **{cell: counts[cell] for cell in _OUTCOMES.values()},
        "total_pairs": len(ground_truth),
    }


def _assessment(metrics: dict[str, float]) -> str:
    f1 = metrics.get("f1", 0.0)
    if f1 >= 0.95 and metrics.get("precision", 0.0) >= 0.98:
        return "EXCELLENT: safe for discrepancy detection"
    if f1 >= 0.85:
        return "GOOD: review reported discrepancies manually"
    if f1 >= 0.70:
        return "FAIR: revisit locality and numbering rules"
    return "POOR: comparator disagrees with the labelled corpus"


def generate_validation_report(metrics: dict[str, float]) -> str:
    """Render *metrics* as a plain-text report ending in a quality band."""
    counts = [
        ("Total pairs evaluated", "total_pairs"),
        ("True positives", "true_positives"),
        ("False positives", "false_positives"),
        ("False negatives", "false_negatives"),
        ("True negatives", "true_negatives"),
    ]
    scores = [
        ("Precision", "precision"),
        ("Recall", "recall"),
        ("F1 Score", "f1"),
        ("Specificity", "specificity"),
        ("Accuracy", "accuracy"),
    ]

    lines = ["OJ Equivalence Validation Report", "=" * 40, ""]
    lines += [f"{label + ':':<24}{metrics.get(key, 0):.0f}" for label, key in counts]
    lines.append("")
    lines += [f"{label + ':':<13}{metrics.get(key, 0.0):.4f}" for label, key in scores]
    lines += ["", f"Assessment: {_assessment(metrics)}"]
    return "\n".join(lines)
