"""
Importer feature package.

Registers the ``flask importer`` CLI group when ``IMPORTER_ENABLED`` is true,
and a stub group explaining how to enable it otherwise.
"""

from __future__ import annotations

from typing import Tuple

from flask import Flask

from crm_app.utils.importer import get_importer_adapters, is_importer_enabled

from .cli import get_disabled_importer_group, importer_cli
from .metrics import record_importer_enabled

IMPORTER_EXTENSION_KEY = "importer"
SUPPORTED_ADAPTERS = ("monica",)

__all__ = [
    "init_importer",
    "IMPORTER_EXTENSION_KEY",
    "SUPPORTED_ADAPTERS",
]


def _ensure_extension_state(app: Flask) -> dict:
    return app.extensions.setdefault(
        IMPORTER_EXTENSION_KEY,
        {
            "enabled": False,
            "configured_adapters": (),
            "active_adapters": (),
        },
    )


def _set_cli(app: Flask, enabled: bool) -> None:
    """Register the appropriate CLI group based on flag state."""
    # Avoid duplicate registrations when running tests
    command_name = importer_cli.name
    if command_name in app.cli.commands:
        app.cli.commands.pop(command_name)

    if enabled:
        app.cli.add_command(importer_cli)
    else:
        app.cli.add_command(get_disabled_importer_group())


def init_importer(app: Flask) -> None:
    """
    Register importer CLI commands based on configuration.

    Records importer state inside ``app.extensions['importer']`` for reuse by
    the CLI and other helpers.
    """
    enabled = is_importer_enabled(app)
    configured_adapters: Tuple[str, ...] = get_importer_adapters(app)

    state = _ensure_extension_state(app)
    state.update({"enabled": enabled, "configured_adapters": configured_adapters})
    record_importer_enabled(enabled)

    if not enabled:
        state["active_adapters"] = ()
        _set_cli(app, enabled=False)
        app.logger.info("Importer disabled via IMPORTER_ENABLED flag; skipping registration.")
        return

    unknown = [name for name in configured_adapters if name not in SUPPORTED_ADAPTERS]
    if unknown:
        raise ValueError(
            f"Unknown importer adapter(s): {', '.join(unknown)}. "
            f"Supported adapters: {', '.join(SUPPORTED_ADAPTERS)}."
        )
    state["active_adapters"] = configured_adapters
    _set_cli(app, enabled=True)

    adapter_names = ", ".join(configured_adapters) or "none"
    app.logger.info("Importer enabled with adapters: %s", adapter_names)
