"""Unified configuration layer for the console data layer.

Merge order (later wins):
    1. Built-in defaults (``config.defaults``)
    2. Optional external file (JSON, or YAML when PyYAML is installed) named
       by ``SCHOOL_CONSOLE_CONFIG_FILE``
    3. Environment variables
    4. In-code overrides passed to :func:`get_console_config`

Environment Variables
---------------------
SCHOOL_CONSOLE_API_BASE_URL     backend base URL (``VITE_API_BASE_URL`` is
                                accepted as a legacy alias)
SCHOOL_CONSOLE_PAGE_SIZE        default page size for paged list views
SCHOOL_CONSOLE_DEBOUNCE_SECONDS search-box debounce delay

External Config File
--------------------
```
api_base_url: https://school.example.org
page_size: 50
debounce_seconds: 0.25
```
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator

from .defaults import (
    DEFAULT_API_BASE_URL,
    DEFAULT_DEBOUNCE_SECONDS,
    DEFAULT_HEALTH_PATH,
    DEFAULT_INITIAL_PAGE,
    DEFAULT_PAGE_SIZE,
)

try:  # Optional YAML support
    import yaml  # type: ignore
except ImportError:  # pragma: no cover
    yaml = None  # type: ignore

CONFIG_FILE_ENV = "SCHOOL_CONSOLE_CONFIG_FILE"

# field -> env var names, first match wins
ENV_FIELD_MAP: Dict[str, tuple[str, ...]] = {
    "api_base_url": ("SCHOOL_CONSOLE_API_BASE_URL", "VITE_API_BASE_URL"),
    "page_size": ("SCHOOL_CONSOLE_PAGE_SIZE",),
    "debounce_seconds": ("SCHOOL_CONSOLE_DEBOUNCE_SECONDS",),
}


class ConsoleSettings(BaseModel):
    """Validated console configuration."""

    api_base_url: str = DEFAULT_API_BASE_URL
    health_path: str = DEFAULT_HEALTH_PATH
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1)
    initial_page: int = Field(default=DEFAULT_INITIAL_PAGE, ge=1)
    debounce_seconds: float = Field(default=DEFAULT_DEBOUNCE_SECONDS, ge=0)

    @field_validator("api_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("api_base_url must not be empty")
        return value.rstrip("/")


def _load_external_config() -> Dict[str, Any]:
    """Read the optional config file; missing or unparsable files yield ``{}``."""
    path = os.getenv(CONFIG_FILE_ENV)
    if not path:
        return {}
    p = Path(path)
    if not p.is_file():
        return {}
    text = p.read_text(encoding="utf-8")
    data: Any
    try:
        data = json.loads(text)
    except ValueError:
        if yaml is None:  # pragma: no cover (depends on optional lib)
            return {}
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError:
            return {}
    return data if isinstance(data, dict) else {}


def _env_overrides() -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for field, names in ENV_FIELD_MAP.items():
        for name in names:
            val = os.getenv(name)
            if val:
                out[field] = val
                break
    return out


def get_console_config(overrides: Optional[Dict[str, Any]] = None) -> ConsoleSettings:
    """Return merged, validated configuration.

    Raises ``pydantic.ValidationError`` when a merged value is out of range
    (e.g. a zero page size).
    """
    cfg: Dict[str, Any] = {}
    cfg |= _load_external_config()
    cfg |= _env_overrides()
    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}
    return ConsoleSettings(**cfg)


__all__ = [
    "ConsoleSettings",
    "get_console_config",
    "ENV_FIELD_MAP",
    "CONFIG_FILE_ENV",
]
