"""Config manager — read ``when_config.json``, layer env overrides, validate.

:func:`configure` is the one-call setup for applications: it loads the
config, applies the logging section, and hands back the polling sections
for the entry points.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from when.core.models.settings import WhenConfig
from when.log_config.logger import setup_logging

_log = logging.getLogger(__name__)

CONFIG_FILE_ENV = "WHEN_CONFIG_FILE"
_SHIPPED_CONFIG = Path(__file__).resolve().parent / "when_config.json"

# env-var name → (section, field, parser)
_ENV_OVERRIDES: dict[str, tuple[str, str, Any]] = {
    "WHEN_LOG_LEVEL": ("logging", "log_level", str.strip),
    "WHEN_LOG_DIR": ("logging", "log_dir", lambda v: v.strip() or None),
    "WHEN_SYNC_INTERVAL_MS": ("fire_and_forget", "interval_ms", float),
    "WHEN_SYNC_TIMEOUT_MS": ("fire_and_forget", "timeout_ms", float),
    "WHEN_ASYNC_INTERVAL_MS": ("awaitable", "interval_ms", float),
    "WHEN_ASYNC_TIMEOUT_MS": ("awaitable", "timeout_ms", float),
}


def load_config(config_path: Path | str | None = None) -> WhenConfig:
    """Return the validated configuration.

    The file is *config_path*, else ``$WHEN_CONFIG_FILE``, else the copy
    shipped with the package.  ``WHEN_*`` environment variables override
    individual fields.

    Raises:
        FileNotFoundError: If the chosen file does not exist.
        pydantic.ValidationError: If a value is out of range or unknown.
    """
    path = _config_path(config_path)
    _log.debug("Loading config from %s", path)
    raw: dict[str, Any] = json.loads(path.read_text(encoding="utf-8"))
    for section, values in _env_overrides().items():
        raw.setdefault(section, {}).update(values)
    return WhenConfig.model_validate(raw)


def configure(config_path: Path | str | None = None) -> WhenConfig:
    """Load the configuration and install the ``when`` log handlers from it."""
    config = load_config(config_path)
    setup_logging(config.logging)
    return config


def _env_overrides() -> dict[str, dict[str, Any]]:
    overrides: dict[str, dict[str, Any]] = {}
    for env_key, (section, field, parse) in _ENV_OVERRIDES.items():
        value = os.environ.get(env_key)
        if value is None:
            continue
        overrides.setdefault(section, {})[field] = parse(value)
        _log.debug("Env override: %s → %s.%s = %r", env_key, section, field, value)
    return overrides


def _config_path(config_path: Path | str | None) -> Path:
    if config_path is None:
        config_path = os.environ.get(CONFIG_FILE_ENV) or _SHIPPED_CONFIG
    path = Path(config_path)
    if not path.is_file():
        raise FileNotFoundError(
            f"Config file not found: {path} (pass a path or set {CONFIG_FILE_ENV})"
        )
    return path
