# ==============================================
# Configuration Management
# ==============================================
#
# PURPOSE:
#   Load and validate all configuration from environment
#   variables / .env file. Provides typed config objects
#   to all other modules.
#
# CLASSES:
# --------
# - ClassificationThresholds (from analysis.decision), filled from
#   PROFILEGEN_* variables:
#     high_cardinality_ratio: float     (default 0.5)
#     high_cardinality_count: int       (default 500)
#     max_string_length: int            (default 255)
#     distinct_cap: int                 (default 1000)
#     facet_max_distinct: int           (default 50)
#     facet_max_ratio: float            (default 0.2)
#     natural_language_min_words: int   (default 3)
#
# - SampleConfig (dataclass)
#     sample_url: str | None            (default None)
#     sample_count: int                 (default 10)
#     request_timeout: float            (default 10.0)
#
# - AppConfig (dataclass)
#     thresholds: ClassificationThresholds
#     sample: SampleConfig
#     heuristic_primary_key: bool       (default False)
#     log_level: str                    (default "WARNING")
#
# FUNCTION:
# ---------
# - get_config() -> AppConfig
#     Load .env using python-dotenv, construct AppConfig.
#     Returns the same singleton on repeated calls.
#
# - reset_config() -> None
#     Drop the singleton so the next get_config() re-reads the env.
#
# USAGE:
# ------
#   from profilegen.config import get_config
#   config = get_config()
#   print(config.thresholds.high_cardinality_ratio)
#
# ==============================================

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Optional

from dotenv import load_dotenv

from profilegen.analysis.decision import ClassificationThresholds
from profilegen.exceptions import InvalidSettingError

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class SampleConfig:
    """Where and how to fetch sample records over HTTP."""
    sample_url: Optional[str] = None
    sample_count: int = 10
    request_timeout: float = 10.0


@dataclass(frozen=True)
class AppConfig:
    """Main application configuration."""
    thresholds: ClassificationThresholds = field(default_factory=ClassificationThresholds)
    sample: SampleConfig = field(default_factory=SampleConfig)
    heuristic_primary_key: bool = False
    log_level: str = "WARNING"


# Singleton instance
_config_instance: Optional[AppConfig] = None


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_number(name: str, kind: Callable[[str], Any], default: str) -> Any:
    raw = os.getenv(name) or default
    try:
        return kind(raw.strip())
    except ValueError:
        raise InvalidSettingError(
            f"{name} must be {'an integer' if kind is int else 'a number'}, got {raw!r}",
            field_name=name,
        ) from None


def _env_log_level(name: str, default: str) -> str:
    level = (os.getenv(name) or default).strip().upper()
    if level not in LOG_LEVELS:
        raise InvalidSettingError(
            f"{name} must be one of {', '.join(LOG_LEVELS)}, got {level!r}",
            field_name=name,
        )
    return level


def get_config() -> AppConfig:
    """
    Load configuration from environment variables / .env file.
    Returns the same singleton instance on repeated calls.

    Returns:
        AppConfig: Application configuration

    Raises:
        InvalidSettingError: a PROFILEGEN_* value cannot be parsed
    """
    global _config_instance

    if _config_instance is not None:
        return _config_instance

    # Load .env file from the current project root
    load_dotenv(dotenv_path=Path.cwd() / ".env")

    thresholds = ClassificationThresholds(
        high_cardinality_ratio=_env_number("PROFILEGEN_HIGH_CARDINALITY_RATIO", float, "0.5"),
        high_cardinality_count=_env_number("PROFILEGEN_HIGH_CARDINALITY_COUNT", int, "500"),
        max_string_length=_env_number("PROFILEGEN_MAX_STRING_LENGTH", int, "255"),
        distinct_cap=_env_number("PROFILEGEN_DISTINCT_CAP", int, "1000"),
        facet_max_distinct=_env_number("PROFILEGEN_FACET_MAX_DISTINCT", int, "50"),
        facet_max_ratio=_env_number("PROFILEGEN_FACET_MAX_RATIO", float, "0.2"),
        natural_language_min_words=_env_number("PROFILEGEN_NATURAL_LANGUAGE_MIN_WORDS", int, "3"),
    )

    sample = SampleConfig(
        sample_url=os.getenv("PROFILEGEN_SAMPLE_URL") or None,
        sample_count=_env_number("PROFILEGEN_SAMPLE_COUNT", int, "10"),
        request_timeout=_env_number("PROFILEGEN_REQUEST_TIMEOUT", float, "10.0"),
    )

    _config_instance = AppConfig(
        thresholds=thresholds,
        sample=sample,
        heuristic_primary_key=_env_bool("PROFILEGEN_HEURISTIC_PK", False),
        log_level=_env_log_level("PROFILEGEN_LOG_LEVEL", "WARNING"),
    )

    return _config_instance


def reset_config() -> None:
    """Forget the cached configuration."""
    global _config_instance
    _config_instance = None
