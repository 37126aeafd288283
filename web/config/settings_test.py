"""Settings for the test suite: same app, SQLite instead of Postgres."""

from .settings import *  # noqa: F401,F403

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "test-orders.sqlite3",  # noqa: F405
        # writers from several threads queue on the file lock
        "OPTIONS": {"timeout": 20},
        # file-backed so every thread sees the same test database
        "TEST": {"NAME": BASE_DIR / "test-orders-run.sqlite3"},  # noqa: F405
    }
}

LOG_LEVEL = "WARNING"
LOGGING["loggers"]["orders"]["level"] = LOG_LEVEL  # noqa: F405
LOGGING["loggers"]["gateway"]["level"] = LOG_LEVEL  # noqa: F405
