# config/base.py
import os

_CONFIG_DIR = os.path.dirname(os.path.abspath(__file__))
_PROJECT_ROOT = os.path.dirname(_CONFIG_DIR)


def _coerce_bool(value, default=False):
    """Convert environment-style truthy/falsey values to bool."""
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    value_str = str(value).strip().lower()
    if value_str in {"1", "true", "yes", "on"}:
        return True
    if value_str in {"0", "false", "no", "off"}:
        return False
    return default


def _coerce_int(value, default, *, minimum=None):
    """Parse an integer environment value, falling back to ``default``."""
    try:
        number = int(value) if value is not None else default
    except (TypeError, ValueError):
        number = default
    if minimum is not None:
        number = max(minimum, number)
    return number


def _parse_adapter_list(value):
    """
    Parse a comma-separated adapter list while keeping order and removing duplicates.

    Returns:
        tuple[str, ...]: Normalized adapter identifiers.
    """
    if not value:
        return ()

    seen = set()
    adapters = []
    for raw_item in value.split(","):
        item = raw_item.strip().lower()
        if not item or item in seen:
            continue
        seen.add(item)
        adapters.append(item)
    return tuple(adapters)


def _sqlite_engine_options(uri):
    if uri and uri.startswith("sqlite"):
        return {
            "connect_args": {
                "check_same_thread": False,
                "timeout": 5,
            }
        }
    return {}


class Config:
    _flask_env = os.environ.get("FLASK_ENV", "development")
    _is_production = _flask_env == "production"

    SECRET_KEY = os.environ.get("SECRET_KEY")
    if not SECRET_KEY and _is_production:
        raise ValueError("SECRET_KEY environment variable is required in production.")
    if not SECRET_KEY:
        SECRET_KEY = "dev-secret-key-change-in-production"

    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {}

    # Importer configuration
    IMPORTER_ENABLED = _coerce_bool(os.environ.get("IMPORTER_ENABLED"), default=True)
    IMPORTER_ADAPTERS = _parse_adapter_list(os.environ.get("IMPORTER_ADAPTERS", "monica"))

    if IMPORTER_ENABLED and not IMPORTER_ADAPTERS:
        raise ValueError(
            "IMPORTER_ENABLED is true but IMPORTER_ADAPTERS is empty. " "Provide at least one adapter name."
        )

    IMPORTER_MAX_UPLOAD_MB = _coerce_int(os.environ.get("IMPORTER_MAX_UPLOAD_MB"), 25, minimum=1)
    IMPORTER_MONICA_MAPPING_PATH = os.environ.get(
        "IMPORTER_MONICA_MAPPING_PATH",
        os.path.join(_CONFIG_DIR, "mappings", "monica_v1.yaml"),
    )
    # Describe skipped rows (partial contacts, dangling references) in the summary warnings
    IMPORTER_MONICA_REPORT_SKIPS = _coerce_bool(
        os.environ.get("IMPORTER_MONICA_REPORT_SKIPS"),
        default=True,
    )


class DevelopmentConfig(Config):
    DEBUG = True
    instance_path = os.path.join(_PROJECT_ROOT, "instance")
    if not os.path.exists(instance_path):
        os.makedirs(instance_path, exist_ok=True)

    # SQLite URI format: sqlite:///absolute/path (3 slashes for absolute path)
    db_uri = "sqlite:///" + os.path.join(instance_path, "crm_dev.db").replace("\\", "/")

    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL", db_uri)
    SQLALCHEMY_ECHO = _coerce_bool(os.environ.get("SQLALCHEMY_ECHO"), default=False)
    SQLALCHEMY_ENGINE_OPTIONS = _sqlite_engine_options(SQLALCHEMY_DATABASE_URI)


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = os.environ.get("SECRET_KEY", "test-secret-key-for-testing-only")
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"  # In-memory database for testing
    SQLALCHEMY_ECHO = False
    SQLALCHEMY_ENGINE_OPTIONS = _sqlite_engine_options(SQLALCHEMY_DATABASE_URI)
    IMPORTER_ENABLED = True
    IMPORTER_ADAPTERS = ("monica",)
    IMPORTER_MONICA_REPORT_SKIPS = True


class ProductionConfig(Config):
    DEBUG = False
    uri = os.environ.get("DATABASE_URL")
    if uri and uri.startswith("postgres://"):
        uri = uri.replace("postgres://", "postgresql://", 1)
    SQLALCHEMY_DATABASE_URI = uri
    SQLALCHEMY_ECHO = False
