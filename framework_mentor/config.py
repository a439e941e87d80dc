"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      — committed static defaults
  2. ``config/local.toml``        — optional local overrides (gitignored)
  3. ``.env``                     — local overrides (gitignored)
  4. Environment variables        — ``FRAMEWORK_MENTOR_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

The library classes (``FrameworkRegistry``, ``FrameworkSelector``) accept an
optional ``SelectionConfig``.  Its defaults equal the documented constants,
so the core works without any config file; only the CLI loads TOML.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

# ── Sub-config models ─────────────────────────────────────────────────────────


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


class SelectionConfig(BaseModel):
    """Selector tuning: history buffer, boosts, and result sizes.

    Attributes:
        history_capacity:         Max framework ids remembered per user (FIFO).
        default_user_key:         History key used when no user hint is given.
        user_key_hint:            ``session_hints`` key that carries the user key.
        history_boost_step:       Score added per prior selection of a framework.
        history_boost_cap:        Upper bound on the cumulative history boost.
        preferred_category_boost: Score added for ``preferred_category`` matches.
        max_alternates:           Number of runner-up recommendations returned.
        diverse_count:            Default size of ``select_diverse()`` output.
    """

    model_config = ConfigDict(frozen=True)

    history_capacity: int = 10
    default_user_key: str = "default"
    user_key_hint: str = "user_id"
    history_boost_step: float = 0.05
    history_boost_cap: float = 0.15
    preferred_category_boost: float = 0.3
    max_alternates: int = 2
    diverse_count: int = 3

    @field_validator("history_capacity", "diverse_count")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"Value must be >= 1, got {v}.")
        return v

    @field_validator("max_alternates")
    @classmethod
    def validate_alternates(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"max_alternates must be >= 0, got {v}.")
        return v

    @field_validator("history_boost_step", "history_boost_cap", "preferred_category_boost")
    @classmethod
    def validate_boost(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError(f"Boost values must be in [0.0, 1.0], got {v}.")
        return v


class ProgressiveConfig(BaseModel):
    """Progressive-depth defaults for catalog entries that support depth."""

    model_config = ConfigDict(frozen=True)

    default_max_depth: int = 5

    @field_validator("default_max_depth")
    @classmethod
    def validate_depth(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"default_max_depth must be >= 1, got {v}.")
        return v


class AppConfig(BaseModel):
    """Complete application configuration — the single source of truth.

    Constructed by ``load_config()`` which merges TOML + .env + environment.
    """

    model_config = ConfigDict(frozen=True)

    logging: LoggingConfig = LoggingConfig()
    selection: SelectionConfig = SelectionConfig()
    progressive: ProgressiveConfig = ProgressiveConfig()
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

    # 1. Load .env file (silently skip if missing)
    load_dotenv(dotenv_path=root / ".env", override=False)

    # 2. Load TOML config
    if config_path is None:
        config_path = root / "config" / "default.toml"

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(
            f"Config file not found: {config_path}\n"
            "Create config/default.toml or pass --config explicitly."
        )

    with open(config_path, "rb") as f:
        raw: dict[str, Any] = tomllib.load(f)

    local_config_path = config_path.parent / "local.toml"
    if local_config_path.exists():
        with open(local_config_path, "rb") as f:
            local_raw: dict[str, Any] = tomllib.load(f)
        raw = _deep_merge(raw, local_raw)

    # 3. Apply FRAMEWORK_MENTOR_* environment variable overrides
    raw = _apply_env_overrides(raw)

    # 4. Build and validate AppConfig
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
    """Apply FRAMEWORK_MENTOR_* env vars to the raw config dict.

    Supported overrides:
      FRAMEWORK_MENTOR_LOG_LEVEL     → raw["logging"]["level"]
      FRAMEWORK_MENTOR_DEFAULT_USER  → raw["selection"]["default_user_key"]
      FRAMEWORK_MENTOR_DEBUG         → raw["debug"]
    """
    if log_level := os.environ.get("FRAMEWORK_MENTOR_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if default_user := os.environ.get("FRAMEWORK_MENTOR_DEFAULT_USER"):
        raw.setdefault("selection", {})["default_user_key"] = default_user

    if debug := os.environ.get("FRAMEWORK_MENTOR_DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure."""
    return AppConfig(
        logging=LoggingConfig(**raw.get("logging", {})),
        selection=SelectionConfig(**raw.get("selection", {})),
        progressive=ProgressiveConfig(**raw.get("progressive", {})),
        debug=raw.get("debug", False),
    )
