# conftest.py

import os

import pytest

# Set testing environment BEFORE importing app so app.py loads TestingConfig
os.environ["FLASK_ENV"] = "testing"

# Now import app and other modules after environment is set
from app import app as flask_app  # noqa: E402
from crm_app.importer import init_importer  # noqa: E402
from crm_app.importer.mapping import DEFAULT_MONICA_MAPPING_PATH  # noqa: E402
from crm_app.models import Account, db  # noqa: E402
from crm_app.utils.logging_config import setup_logging  # noqa: E402


@pytest.fixture(scope="function")
def app():
    """Create and configure a test Flask application backed by an in-memory database"""
    flask_app.config.update(
        {
            "TESTING": True,
            "SECRET_KEY": "test-secret-key-for-testing-only",
            "ENABLE_FILE_LOGGING": False,
            "ENABLE_CONSOLE_LOGGING": False,
            "LOG_LEVEL": "DEBUG",
            "IMPORTER_ENABLED": True,
            "IMPORTER_ADAPTERS": ("monica",),
            "IMPORTER_MAX_UPLOAD_MB": 25,
            "IMPORTER_MONICA_REPORT_SKIPS": True,
            "IMPORTER_MONICA_MAPPING_PATH": str(DEFAULT_MONICA_MAPPING_PATH),
        }
    )

    # Re-initialize logging and importer registration with the updated config
    setup_logging(flask_app)
    init_importer(flask_app)

    with flask_app.app_context():
        # Drop any existing tables to ensure clean state
        db.drop_all()
        db.create_all()
        yield flask_app
        db.session.remove()
        db.drop_all()


@pytest.fixture(autouse=True)
def app_context(app):
    """Automatically provide app context for all tests"""
    with app.app_context():
        yield


@pytest.fixture
def runner(app):
    """Create a test CLI runner"""
    return app.test_cli_runner()


@pytest.fixture
def account(app):
    """Create the account imports are loaded into"""
    account = Account(name="Test Account", slug="test-account")
    db.session.add(account)
    db.session.commit()
    return account


@pytest.fixture
def other_account(app):
    """Create a second account to check imports stay scoped"""
    account = Account(name="Other Account", slug="other-account")
    db.session.add(account)
    db.session.commit()
    return account
