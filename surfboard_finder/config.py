"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      — committed static defaults
  2. ``config/local.toml``        — optional local overrides (gitignored)
  3. ``.env``                     — local overrides (gitignored)
  4. Environment variables        — ``SURFBOARD_FINDER_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

The catalog source is chosen here at deploy time (``[catalog] kind``); end
users cannot switch it at runtime.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

from surfboard_finder.taxonomy.board_taxonomy import (
    Ability,
    CatalogKind,
    SortMode,
    WaveType,
)

# ── Sub-config models ─────────────────────────────────────────────────────────


class CatalogConfig(BaseModel):
    """Board feed location."""

    model_config = ConfigDict(frozen=True)

    kind: CatalogKind = CatalogKind.JSON_URL
    json_url: str = (
        "https://github.com/DJenkin82/Surfboard-Finder/blob/main/Surfboard%20Finder.txt"
    )
    csv_url: str = ""
    timeout_s: Optional[float] = None

    @field_validator("timeout_s")
    @classmethod
    def validate_timeout(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v <= 0:
            raise ValueError(f"timeout_s must be positive or unset, got {v}.")
        return v


class FinderConfig(BaseModel):
    """Default shopper inputs used when the CLI is not given one."""

    model_config = ConfigDict(frozen=True)

    default_weight: float = 80.0
    default_ability: Ability = Ability.INTERMEDIATE
    default_wave: WaveType = WaveType.MELLOW_POINT
    default_sort: SortMode = SortMode.BEST

    @field_validator("default_weight")
    @classmethod
    def validate_weight(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"default_weight must be positive, got {v}.")
        return v


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = ""
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class AppConfig(BaseModel):
    """Complete application configuration.

    Constructed by ``load_config()`` which merges TOML + .env + environment.
    """

    model_config = ConfigDict(frozen=True)

    catalog: CatalogConfig = CatalogConfig()
    finder: FinderConfig = FinderConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Loader ────────────────────────────────────────────────────────────────────

_PROJECT_ROOT = Path(__file__).parent.parent


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (contains pyproject.toml)."""
    candidate = Path(__file__).parent
    for _ in range(5):
        if (candidate / "pyproject.toml").exists():
            return candidate
        candidate = candidate.parent
    return _PROJECT_ROOT


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load and merge application configuration.

    Args:
        config_path: Explicit path to a TOML config file. Defaults to
            ``<project_root>/config/default.toml``.

    Returns:
        Fully validated ``AppConfig`` instance.

    Raises:
        FileNotFoundError: If the specified ``config_path`` does not exist.
        pydantic.ValidationError: If merged config values fail validation.
    """
    root = _find_project_root()

    load_dotenv(dotenv_path=root / ".env", override=False)

    if config_path is None:
        config_path = root / "config" / "default.toml"

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(
            f"Config file not found: {config_path}\n"
            "Create config/default.toml or pass --config."
        )

    with open(config_path, "rb") as f:
        raw: dict[str, Any] = tomllib.load(f)

    local_config_path = config_path.parent / "local.toml"
    if local_config_path.exists():
        with open(local_config_path, "rb") as f:
            local_raw: dict[str, Any] = tomllib.load(f)
        raw = _deep_merge(raw, local_raw)

    raw = _apply_env_overrides(raw)

    return _build_app_config(raw)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into ``base``."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Apply SURFBOARD_FINDER_* env vars to the raw config dict.

    Supported overrides:
      SURFBOARD_FINDER_SOURCE_KIND → raw["catalog"]["kind"]
      SURFBOARD_FINDER_JSON_URL    → raw["catalog"]["json_url"]
      SURFBOARD_FINDER_CSV_URL     → raw["catalog"]["csv_url"]
      SURFBOARD_FINDER_LOG_LEVEL   → raw["logging"]["level"]
      SURFBOARD_FINDER_DEBUG       → raw["debug"]
    """
    if kind := os.environ.get("SURFBOARD_FINDER_SOURCE_KIND"):
        raw.setdefault("catalog", {})["kind"] = kind

    if json_url := os.environ.get("SURFBOARD_FINDER_JSON_URL"):
        raw.setdefault("catalog", {})["json_url"] = json_url

    if csv_url := os.environ.get("SURFBOARD_FINDER_CSV_URL"):
        raw.setdefault("catalog", {})["csv_url"] = csv_url

    if log_level := os.environ.get("SURFBOARD_FINDER_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if debug := os.environ.get("SURFBOARD_FINDER_DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure."""
    project = raw.pop("project", {})

    return AppConfig(
        catalog=CatalogConfig(**raw.get("catalog", {})),
        finder=FinderConfig(**raw.get("finder", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
        debug=raw.get("debug", project.get("debug", False)),
    )
