"""Configuration management for the cloud SDK."""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

_config_logger = logging.getLogger(__name__)


class LoggingSettings(BaseModel):
    level: str = Field(default="INFO", description="Python logging level name")
    file: str | None = Field(default=None, description="Optional log file path")


class ClientSettings(BaseModel):
    region: str | None = Field(default=None)
    endpoint_template: str = Field(
        default="https://{service}.{region}.oraclecloud.com",
        description="Service endpoint, formatted with the service name and region.",
    )
    timeout_seconds: float = Field(default=60.0, ge=0.1, le=600)
    user_agent: str = Field(default="cloud-sdk-python")

    @field_validator("endpoint_template")
    @classmethod
    def _validate_endpoint_template(cls, value: str) -> str:
        if "{service}" not in value:
            raise ValueError("endpoint_template must contain a {service} placeholder")
        return value.rstrip("/")


class WaiterSettings(BaseModel):
    max_interval_seconds: float = Field(default=30.0, gt=0, le=3600)
    max_wait_seconds: float = Field(default=1200.0, ge=0)
    initial_interval_seconds: float = Field(default=1.0, gt=0, le=3600)


class Settings(BaseModel):
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    client: ClientSettings = Field(default_factory=ClientSettings)
    waiter: WaiterSettings = Field(default_factory=WaiterSettings)


# Environment variable for each settings field, grouped by section.
ENV_KEYS: dict[str, dict[str, str]] = {
    "logging": {
        "level": "LOG_LEVEL",
        "file": "LOG_FILE",
    },
    "client": {
        "region": "SDK_REGION",
        "endpoint_template": "SDK_ENDPOINT_TEMPLATE",
        "timeout_seconds": "SDK_TIMEOUT_SECONDS",
        "user_agent": "SDK_USER_AGENT",
    },
    "waiter": {
        "max_interval_seconds": "WAITER_MAX_INTERVAL_SECONDS",
        "max_wait_seconds": "WAITER_MAX_WAIT_SECONDS",
        "initial_interval_seconds": "WAITER_INITIAL_INTERVAL_SECONDS",
    },
}

_PATH_FIELDS = frozenset({("logging", "file")})


def _resolve_path(path: str) -> str:
    candidate = Path(path).expanduser()
    if not candidate.is_absolute():
        candidate = Path.cwd() / candidate
    return str(candidate.resolve())


def _env_section(section: str, model_cls: type[BaseModel]) -> dict[str, object]:
    """Collect the non-empty environment overrides for one settings section.

    A malformed number is dropped with a warning so the field keeps its default.
    """
    values: dict[str, object] = {}
    for field_name, env_key in ENV_KEYS[section].items():
        raw = os.getenv(env_key, "").strip()
        if not raw:
            continue
        if model_cls.model_fields[field_name].annotation is float:
            try:
                float(raw)
            except ValueError:
                _config_logger.warning(
                    "Ignoring %s=%r: not a number, keeping the default", env_key, raw
                )
                continue
        if (section, field_name) in _PATH_FIELDS:
            raw = _resolve_path(raw)
        values[field_name] = raw
    return values


def load_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""
    return _load_settings_cached()


@lru_cache(maxsize=1)
def _load_settings_cached() -> Settings:
    load_dotenv(dotenv_path=find_dotenv(usecwd=True))
    sections = {
        name: _env_section(name, field.annotation)
        for name, field in Settings.model_fields.items()
    }
    try:
        return Settings.model_validate(sections)
    except ValidationError as exc:
        raise RuntimeError(f"Invalid configuration: {exc}") from exc
