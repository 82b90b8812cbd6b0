import pytest
from flask import Flask

from crm_app.importer import IMPORTER_EXTENSION_KEY, init_importer
from crm_app.utils.importer import get_importer_adapters, get_max_upload_bytes, is_importer_enabled


def build_app(enabled=False, adapters=()):
    app = Flask(__name__)
    app.config.update(
        SECRET_KEY="test-secret",
        TESTING=True,
        IMPORTER_ENABLED=enabled,
        IMPORTER_ADAPTERS=tuple(adapters),
    )

    init_importer(app)
    return app


def test_importer_disabled_registers_stub_cli():
    app = build_app(enabled=False)

    runner = app.test_cli_runner()
    result = runner.invoke(args=["importer"])
    assert result.exit_code != 0
    assert "Importer commands are unavailable" in result.output

    importer_state = app.extensions[IMPORTER_EXTENSION_KEY]
    assert importer_state["enabled"] is False
    assert importer_state["active_adapters"] == ()


def test_importer_enabled_registers_cli():
    app = build_app(enabled=True, adapters=("monica",))

    runner = app.test_cli_runner()
    result = runner.invoke(args=["importer"])
    assert result.exit_code == 0
    assert "Enabled importer adapters:" in result.output
    assert "- monica" in result.output

    importer_state = app.extensions[IMPORTER_EXTENSION_KEY]
    assert importer_state["enabled"] is True
    assert importer_state["active_adapters"] == ("monica",)


def test_importer_rejects_unknown_adapters():
    with pytest.raises(ValueError, match="salesforce"):
        build_app(enabled=True, adapters=("monica", "salesforce"))


def test_init_importer_replaces_existing_cli_group():
    app = build_app(enabled=True, adapters=("monica",))
    app.config["IMPORTER_ENABLED"] = False
    init_importer(app)

    result = app.test_cli_runner().invoke(args=["importer"])
    assert result.exit_code != 0
    assert "IMPORTER_ENABLED=false" in result.output


def test_importer_config_helpers():
    app = build_app(enabled=True, adapters=("monica",))
    app.config["IMPORTER_MAX_UPLOAD_MB"] = 2

    assert is_importer_enabled(app) is True
    assert get_importer_adapters(app) == ("monica",)
    assert get_max_upload_bytes(app) == 2 * 1024 * 1024
