import os
from pathlib import Path


def _env_bool(name: str, default: str) -> bool:
    return os.environ.get(name, default) == '1'


def _env_int(name: str, default: str) -> int:
    raw_value = os.environ.get(name, default)
    try:
        return int(raw_value)
    except (TypeError, ValueError) as exc:
        raise RuntimeError(f"{name} must be an integer value, got {raw_value!r}.") from exc


def _env_positive_int(name: str, default: str) -> int:
    value = _env_int(name, default)
    if value < 1:
        raise RuntimeError(f"{name} must be at least 1, got {value}.")
    return value


class Config:
    # Flask
    # Signs session cookies and CSRF tokens. Use a random value in production.
    SECRET_KEY = os.environ.get('SECRET_KEY', 'dev-secret-key-change-in-production')

    # Debug should only be enabled for local development.
    DEBUG = os.environ.get('FLASK_DEBUG') == '1' or os.environ.get('FLASK_ENV') == 'development'
    # Set this to 1 only when traffic comes through your own reverse proxy.
    TRUST_PROXY = _env_bool('TRUST_PROXY', '0')

    APP_TIMEZONE = os.environ.get('APP_TIMEZONE', 'UTC')

    # Listing
    # Rows per page on the test entity listing.
    ENTITY_LIST_PER_PAGE = _env_positive_int('ENTITY_LIST_PER_PAGE', '50')

    # Database
    BASE_DIR = Path(__file__).resolve().parent.parent
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        'DATABASE_URL',
        f"sqlite:///{BASE_DIR / 'instance' / 'tablesort.db'}"
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_pre_ping': True,
    }
    if str(SQLALCHEMY_DATABASE_URI).startswith('sqlite'):
        SQLALCHEMY_ENGINE_OPTIONS['connect_args'] = {
            'timeout': _env_int('SQLITE_TIMEOUT', '30'),
        }
