import pytest

from config import TestingConfig
from config.base import _coerce_bool, _coerce_int, _parse_adapter_list
from config.monitoring import MonitoringConfig, TestingMonitoringConfig
from config.validation import validate_and_exit, validate_environment


@pytest.mark.parametrize(
    ("value", "default", "expected"),
    [
        (None, True, True),
        ("yes", False, True),
        ("OFF", True, False),
        ("maybe", False, False),
        (True, False, True),
    ],
)
def test_coerce_bool(value, default, expected):
    assert _coerce_bool(value, default=default) is expected


def test_coerce_int():
    assert _coerce_int("12", 5) == 12
    assert _coerce_int("abc", 5) == 5
    assert _coerce_int(None, 5) == 5
    assert _coerce_int("0", 25, minimum=1) == 1


def test_parse_adapter_list():
    assert _parse_adapter_list(" Monica, monica ,,csv") == ("monica", "csv")
    assert _parse_adapter_list("") == ()


def test_testing_config_defaults():
    assert TestingConfig.TESTING is True
    assert TestingConfig.SQLALCHEMY_DATABASE_URI == "sqlite:///:memory:"
    assert TestingConfig.IMPORTER_ADAPTERS == ("monica",)
    assert TestingConfig.IMPORTER_MONICA_MAPPING_PATH.endswith("monica_v1.yaml")


def test_validate_environment_skips_non_production():
    assert validate_environment("development") == (True, [])


def test_validate_environment_production_requirements(monkeypatch, tmp_path):
    monkeypatch.delenv("SECRET_KEY", raising=False)
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.setenv("IMPORTER_MONICA_MAPPING_PATH", str(tmp_path / "missing.yaml"))

    is_valid, errors = validate_environment("production")

    assert is_valid is False
    assert len(errors) == 3
    assert errors[0].startswith("SECRET_KEY")
    assert errors[1].startswith("DATABASE_URL")
    assert "IMPORTER_MONICA_MAPPING_PATH" in errors[2]


def test_validate_environment_production_ok(monkeypatch):
    monkeypatch.setenv("SECRET_KEY", "a-real-secret")
    monkeypatch.setenv("DATABASE_URL", "postgresql://crm@localhost/crm")
    monkeypatch.delenv("IMPORTER_MONICA_MAPPING_PATH", raising=False)

    assert validate_environment("production") == (True, [])


def test_validate_and_exit_exits_on_errors(monkeypatch, capsys):
    monkeypatch.delenv("SECRET_KEY", raising=False)
    monkeypatch.delenv("DATABASE_URL", raising=False)

    with pytest.raises(SystemExit) as excinfo:
        validate_and_exit("production")

    assert excinfo.value.code == 1
    assert "ENVIRONMENT VALIDATION FAILED" in capsys.readouterr().err


def test_monitoring_config_only_carries_logging_keys():
    keys = {name for name in vars(MonitoringConfig) if name.isupper()}

    assert keys == {
        "LOG_LEVEL",
        "LOG_FORMAT",
        "LOG_DIR",
        "LOG_FILE_MAX_BYTES",
        "LOG_FILE_BACKUP_COUNT",
        "ENABLE_FILE_LOGGING",
        "ENABLE_CONSOLE_LOGGING",
    }
    assert TestingMonitoringConfig.ENABLE_FILE_LOGGING is False
