"""Application configuration primitives."""

from __future__ import annotations

import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

from pydantic import Field, HttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SECRETS_PATH = Path(".secrets/secrets.toml")


class Settings(BaseSettings):
    """Central configuration for the device classification resolver."""

    openfda_base_url: HttpUrl = "https://api.fda.gov/device"
    openfda_api_key: str | None = None
    request_timeout: float = 30.0

    classification_endpoint: str = "classification"
    bridge_endpoint: str = "510k"
    bridge_sort: str | None = "decision_date:desc"

    call_budget: int = Field(default=30, ge=0)
    relevance_threshold: float = Field(default=0.4, ge=0.0, le=1.0)
    result_limit: int = Field(default=10, ge=1, le=50)
    search_fields: tuple[str, ...] = ("device_name", "definition")
    combination_priority: Literal["size", "phrase"] = "size"

    bridge_search_field: str = "device_name"
    bridge_result_limit: int = Field(default=20, ge=1, le=100)
    bridge_combination_limit: int = Field(default=8, ge=0)
    bridge_min_term_length: int = Field(default=5, ge=1)
    bridge_call_budget: int = Field(default=30, ge=0)
    bridge_sample_size: int = Field(default=5, ge=0)

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    model_config = SettingsConfigDict(env_prefix="FDA_", env_file=(), extra="ignore")

    @property
    def base_url(self) -> str:
        return str(self.openfda_base_url).rstrip("/")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Settings from the environment, overlaid with ``.secrets/secrets.toml`` when present."""
    return Settings(**_load_settings_overrides())


# secrets.toml key -> Settings field, for the [openfda] table.
_OPENFDA_KEYS = {
    "base_url": "openfda_base_url",
    "url": "openfda_base_url",
    "api_key": "openfda_api_key",
    "timeout": "request_timeout",
}


def _load_settings_overrides(secrets_path: Path = DEFAULT_SECRETS_PATH) -> dict[str, Any]:
    """Map the ``[openfda]`` and ``[classification]`` tables onto Settings fields.

    Blank strings are dropped so that an empty ``api_key = ""`` leaves the
    default in place; unknown keys are ignored.
    """
    if not secrets_path.is_file():
        return {}
    with secrets_path.open("rb") as handle:
        data = tomllib.load(handle)

    overrides: dict[str, Any] = {}
    openfda = data.get("openfda") or data.get("open_fda") or {}
    if isinstance(openfda, dict):
        for key, value in openfda.items():
            target = _OPENFDA_KEYS.get(key)
            if target and target not in overrides:
                overrides[target] = value

    classification = data.get("classification") or {}
    if isinstance(classification, dict):
        overrides.update((key, value) for key, value in classification.items() if key in Settings.model_fields)

    cleaned: dict[str, Any] = {}
    for key, value in overrides.items():
        if isinstance(value, str):
            value = value.strip()
            if not value:
                continue
        if value is not None:
            cleaned[key] = value
    return cleaned
