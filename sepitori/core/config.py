# Fichier: sepitori/core/config.py
from pydantic_settings import BaseSettings
from typing import List
from pydantic import ValidationError, field_validator
import sys


class Settings(BaseSettings):
    # --- Persisted state ---
    MODEL_PATH: str = "data/sepitori_classifier.pkl"
    TRAINING_DATA_PATH: str = "data/training.jsonl"

    # --- Server ---
    HOST: str = "0.0.0.0"
    PORT: int = 5000
    BACKEND_CORS_ORIGINS: List[str] = ["*"]
    LOG_LEVEL: str = "INFO"

    # --- Labelling rules ---
    CONFIDENCE_THRESHOLD: float = 0.65
    MIXED_UNSEEN_RATIO: float = 0.5
    DOWNGRADE_MIXED_ON_UNSEEN: bool = True

    # --- Normalizer options ---
    USE_STEMMING: bool = False
    REMOVE_STOPWORDS: bool = False

    # --- Training ---
    RELOAD_MODEL_AFTER_TRAIN: bool = False

    # --- Introspection ---
    DEBUG_FEATURES_LIMIT: int = 50

    class Config:
        env_file = ".env"

    @field_validator("CONFIDENCE_THRESHOLD")
    @classmethod
    def _check_threshold(cls, value: float) -> float:
        if not 0 < value <= 1:
            raise ValueError("CONFIDENCE_THRESHOLD must be in (0, 1]")
        return value

    @field_validator("MIXED_UNSEEN_RATIO")
    @classmethod
    def _check_ratio(cls, value: float) -> float:
        if not 0 <= value <= 1:
            raise ValueError("MIXED_UNSEEN_RATIO must be in [0, 1]")
        return value

    @field_validator("DEBUG_FEATURES_LIMIT")
    @classmethod
    def _check_limit(cls, value: int) -> int:
        if value < 0:
            raise ValueError("DEBUG_FEATURES_LIMIT must not be negative")
        return value

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        if not isinstance(value, str):
            return value
        return value.strip().upper()


def _describe_setting_error(error) -> str:
    name = ".".join(str(part) for part in error.get("loc", ())) or "<settings>"
    line = f"  - {name}={error.get('input')!r}: {error.get('msg', 'invalid value')}"
    if error.get("type"):
        line += f" [{error['type']}]"
    return line


def _log_settings_validation_error(exc: ValidationError) -> None:
    """Print each rejected setting with the value it was given.

    The Settings model is built at import time, so a bad value (for example
    ``CONFIDENCE_THRESHOLD=2``) would otherwise only surface as an import
    traceback.
    """

    lines = [_describe_setting_error(error) for error in exc.errors()] or [str(exc)]
    print("Invalid Sepitori settings:", file=sys.stderr)
    print("\n".join(lines), file=sys.stderr)


try:
    settings = Settings()
except ValidationError as exc:  # pragma: no cover - exercised at runtime
    _log_settings_validation_error(exc)
    raise
