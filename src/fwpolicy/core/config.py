"""fwpolicy configuration: Pydantic model, load, and save."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from fwpolicy.core.constants import DEFAULT_CONFIG_PATH, DEFAULT_SECBASE
from fwpolicy.core.exceptions import ConfigError, ConfigNotFoundError

# ---------------------------------------------------------------------------
# Sub-models
# ---------------------------------------------------------------------------


class PolicyConfig(BaseModel):
    secbase: str = DEFAULT_SECBASE

    @field_validator("secbase")
    @classmethod
    def validate_secbase(cls, v: str) -> str:
        if not os.path.isabs(v):
            raise ValueError(f"secbase must be an absolute path, got {v!r}")
        return os.path.normpath(v)


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = "text"  # "text" | "json"

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR"}
        if v.upper() not in allowed:
            raise ValueError(f"Log level must be one of: {sorted(allowed)}")
        return v.upper()

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        if v.lower() not in ("text", "json"):
            raise ValueError("Log format must be 'text' or 'json'")
        return v.lower()


# ---------------------------------------------------------------------------
# Root config
# ---------------------------------------------------------------------------


class FrameworkPolicyConfig(BaseModel):
    """Root fwpolicy configuration model."""

    policy: PolicyConfig = Field(default_factory=PolicyConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def secbase(self) -> Path:
        return Path(self.policy.secbase)


# ---------------------------------------------------------------------------
# Load / save
# ---------------------------------------------------------------------------


def _config_file_path() -> Path:
    if env_path := os.environ.get("FWPOLICY_CONFIG"):
        return Path(env_path)
    return Path(DEFAULT_CONFIG_PATH)


def load_config(path: Path | None = None) -> FrameworkPolicyConfig:
    """
    Load FrameworkPolicyConfig from TOML file, overlaid with environment variables.

    Priority (highest to lowest):
      1. Environment variables (FWPOLICY_*)
      2. Config file (/etc/fwpolicy/config.toml or $FWPOLICY_CONFIG)
      3. Built-in defaults

    A missing default config file is not an error; a missing file that was
    asked for explicitly (argument or $FWPOLICY_CONFIG) is.
    """
    import tomllib

    explicit = path is not None or "FWPOLICY_CONFIG" in os.environ
    cfg_path = path or _config_file_path()

    data: dict[str, Any] = {}
    if cfg_path.exists():
        try:
            with open(cfg_path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as exc:
            raise ConfigError(f"Cannot read config file {cfg_path}: {exc}") from exc
    elif explicit:
        raise ConfigNotFoundError(f"Config file not found: {cfg_path}")

    _apply_env_overrides(data)

    try:
        return FrameworkPolicyConfig.model_validate(data)
    except ValueError as exc:
        raise ConfigError(f"Invalid config at {cfg_path}: {exc}") from exc


def _apply_env_overrides(data: dict[str, Any]) -> None:
    """Overlay FWPOLICY_* environment variables onto the parsed TOML data."""
    if secbase := os.environ.get("FWPOLICY_SECBASE"):
        data.setdefault("policy", {})["secbase"] = secbase
    if level := os.environ.get("FWPOLICY_LOG_LEVEL"):
        data.setdefault("logging", {})["level"] = level
    if fmt := os.environ.get("FWPOLICY_LOG_FORMAT"):
        data.setdefault("logging", {})["format"] = fmt


def save_config(config_data: dict[str, Any], path: Path | None = None) -> Path:
    """Write config dict to TOML file, world-readable (0644)."""
    import tomli_w

    cfg_path = path or _config_file_path()
    cfg_path.parent.mkdir(mode=0o755, parents=True, exist_ok=True)

    # Write atomically
    tmp_path = cfg_path.with_suffix(".tmp")
    try:
        with open(tmp_path, "wb") as f:
            tomli_w.dump(config_data, f)
        tmp_path.rename(cfg_path)
    except OSError as exc:
        tmp_path.unlink(missing_ok=True)
        raise ConfigError(f"Cannot write config to {cfg_path}: {exc}") from exc

    cfg_path.chmod(0o644)
    return cfg_path
