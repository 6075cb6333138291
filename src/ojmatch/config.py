"""Application settings loaded from environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """All configuration is loaded from environment variables prefixed with OJ_."""

    # Reference dataset
    reference_dataset_path: str = ""
    reference_name_field: str = "ds_orgao_julgador"

    # Resolver heuristics (tuned against the production reference corpus)
    keyword_overlap_threshold: float = 0.7
    keyword_min_token_length: int = 3
    partial_match_enabled: bool = True
    city_number_match_enabled: bool = True
    similarity_threshold: float = 0.8

    model_config = {"env_file": ".env", "env_prefix": "OJ_"}


def get_settings() -> Settings:
    """Return a fresh Settings instance."""
    return Settings()
