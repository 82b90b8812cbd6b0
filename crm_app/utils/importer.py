"""
Utility helpers for importer feature flag checks.
"""

from __future__ import annotations

from typing import Iterable, Tuple

from flask import current_app


def _get_config(app=None):
    if app is not None:
        return app.config
    return current_app.config


def is_importer_enabled(app=None) -> bool:
    """Return True when the importer feature flag is enabled."""
    config = _get_config(app)
    return bool(config.get("IMPORTER_ENABLED", False))


def get_importer_adapters(app=None) -> Tuple[str, ...]:
    """Return the configured importer adapter identifiers."""
    config = _get_config(app)
    adapters: Iterable[str] = config.get("IMPORTER_ADAPTERS", ())
    return tuple(adapters)


def get_max_upload_bytes(app=None) -> int:
    """Largest export file the importer accepts, from ``IMPORTER_MAX_UPLOAD_MB``."""
    config = _get_config(app)
    return int(config.get("IMPORTER_MAX_UPLOAD_MB", 25)) * 1024 * 1024
