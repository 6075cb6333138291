"""Reference dataset loading.

Reads the canonical OJ names from the host's export.  Supported formats:

* ``.json``: a list of strings, or of objects carrying the name field
  (``ds_orgao_julgador`` in the court system's export);
* ``.csv``: a column holding the name;
* anything else: one name per line.
"""

from __future__ import annotations

import json
from pathlib import Path

import pandas as pd
import structlog

from ojmatch.config import Settings, get_settings
from ojmatch.entity_resolution.index import ReferenceIndex, build_index

logger = structlog.get_logger(__name__)

DEFAULT_NAME_FIELD = "ds_orgao_julgador"


def _clean(values: list) -> list[str]:
    names = []
    for value in values:
        if value is None or (isinstance(value, float) and pd.isna(value)):
            continue
        name = str(value).strip()
        if name:
            names.append(name)
    return names


def _load_json(path: Path, name_field: str) -> list[str]:
    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, list):
        logger.error("reference_json_not_a_list", path=str(path))
        return []

    values = []
    for entry in data:
        if isinstance(entry, dict):
            if name_field not in entry:
                logger.error("reference_json_missing_field", field=name_field, path=str(path))
                return []
            values.append(entry[name_field])
        else:
            values.append(entry)
    return _clean(values)


def _load_csv(path: Path, name_field: str) -> list[str]:
    df = pd.read_csv(path, dtype=str)
    if name_field not in df.columns:
        logger.error(
            "reference_csv_missing_column",
            column=name_field,
            columns=list(df.columns),
            path=str(path),
        )
        return []
    return _clean(df[name_field].tolist())


def _load_text(path: Path) -> list[str]:
    return _clean(path.read_text(encoding="utf-8").splitlines())


def load_reference_names(path: Path | str, name_field: str = DEFAULT_NAME_FIELD) -> list[str]:
    """Load canonical OJ names from *path*, trimmed and in file order.

    A missing file raises ``FileNotFoundError``; a file without the name
    field/column is logged and yields an empty list.
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".json":
        names = _load_json(path, name_field)
    elif suffix == ".csv":
        names = _load_csv(path, name_field)
    else:
        names = _load_text(path)

    logger.info("reference_dataset_loaded", path=str(path), count=len(names))
    return names


def load_reference_index(settings: Settings | None = None) -> ReferenceIndex:
    """Load the configured dataset and build its index.

    With no ``reference_dataset_path`` configured the index is empty and
    the resolver echoes every input unchanged.
    """
    if settings is None:
        settings = get_settings()

    if not settings.reference_dataset_path:
        logger.warning("reference_dataset_not_configured")
        return build_index(())

    names = load_reference_names(settings.reference_dataset_path, settings.reference_name_field)
    index = build_index(names)
    logger.info(
        "reference_index_built",
        canonical_names=len(index),
        variants=len(index.variants),
    )
    return index
