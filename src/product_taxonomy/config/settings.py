"""Configuration management for the product taxonomy CLI."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Literal

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).resolve().parents[3]
DEFAULT_CONFIG_DIR = PROJECT_ROOT / "config"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "default.yaml"

_NESTED_ENV_PREFIX = "PRODUCT_TAXONOMY_SETTINGS__"


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge two dictionaries."""

    result = dict(base)
    for key, value in override.items():
        if (
            key in result
            and isinstance(result[key], dict)
            and isinstance(value, dict)
        ):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _load_yaml_file(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def _apply_env_overrides(base: Dict[str, Any]) -> Dict[str, Any]:
    """Apply overrides from PRODUCT_TAXONOMY_SETTINGS__* environment variables."""

    result = dict(base)
    for key, value in os.environ.items():
        if not key.startswith(_NESTED_ENV_PREFIX):
            continue
        path = key[len(_NESTED_ENV_PREFIX) :].lower().split("__")
        cursor = result
        for part in path[:-1]:
            existing = cursor.get(part)
            if not isinstance(existing, dict):
                existing = {}
                cursor[part] = existing
            cursor = existing
        cursor[path[-1]] = value
    return result


class StoreConfig(BaseModel):
    """Connection details for the host taxonomy storage."""

    backend: Literal["json", "rest"] = Field(
        default="json",
        description="Storage backend: a local JSON snapshot or the host REST API.",
    )
    snapshot_path: Path = Field(default=Path("data") / "terms.json")
    base_url: str | None = Field(default=None, description="Host site URL, e.g. https://shop.example.com")
    username: str | None = Field(default=None)
    application_password: str | None = Field(default=None)
    timeout_seconds: float = Field(default=20.0, gt=0.0)
    verify_tls: bool = Field(default=True)

    @field_validator("base_url")
    @classmethod
    def _strip_base_url(cls, value: str | None) -> str | None:
        if value is None:
            return None
        cleaned = value.strip().rstrip("/")
        if not cleaned:
            return None
        if not cleaned.startswith(("http://", "https://")):
            raise ValueError("store.base_url must be an absolute http(s) URL")
        return cleaned


class OutputConfig(BaseModel):
    """Defaults applied by the output formatter."""

    default_format: Literal["table", "json", "csv", "yaml"] = Field(default="table")


class LoggingConfig(BaseModel):
    """Sinks and verbosity for loguru."""

    level: str = Field(default="WARNING")
    log_file: Path | None = Field(default=None)

    @field_validator("level")
    @classmethod
    def _normalise_level(cls, value: str) -> str:
        return value.strip().upper()


class Settings(BaseSettings):
    """Primary configuration object for the product taxonomy CLI.

    Precedence (highest first): explicit kwargs (``--override`` flags),
    environment variables prefixed with ``PRODUCT_TAXONOMY_`` (handled by
    :class:`BaseSettings`), nested overrides via
    ``PRODUCT_TAXONOMY_SETTINGS__`` variables, environment-specific YAML
    (e.g. ``production.yaml``), the default YAML file, and finally the class
    defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="PRODUCT_TAXONOMY_",
        validate_assignment=True,
        extra="ignore",
    )

    environment: Literal["development", "testing", "production"] = Field(
        default="development",
        description="Active runtime environment",
    )
    config_dir: Path = Field(default=DEFAULT_CONFIG_DIR)
    store: StoreConfig = Field(default_factory=StoreConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @model_validator(mode="before")
    @classmethod
    def _bootstrap_from_files(cls, values: Dict[str, Any]) -> Dict[str, Any]:
        """Load YAML files and merge with provided overrides."""

        config_dir = Path(values.get("config_dir") or DEFAULT_CONFIG_DIR)
        environment = values.get("environment") or os.getenv("PRODUCT_TAXONOMY_ENV", "development")
        base_config = _load_yaml_file(config_dir / "default.yaml")
        env_config = _load_yaml_file(config_dir / f"{environment}.yaml")
        merged = _deep_merge(base_config, env_config)
        hydrated = _apply_env_overrides(merged)
        return _deep_merge(hydrated, {k: v for k, v in values.items() if v is not None})

    @model_validator(mode="after")
    def _check_rest_credentials(self) -> "Settings":
        if self.store.backend == "rest" and not self.store.base_url:
            raise ValueError("store.base_url is required when store.backend is 'rest'")
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a singleton settings instance."""

    return Settings()


__all__ = ["Settings", "get_settings", "StoreConfig", "OutputConfig", "LoggingConfig"]
