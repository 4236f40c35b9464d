import os

# Mock SECRET_KEY for tests BEFORE importing settings to bypass validation
os.environ.setdefault("SECRET_KEY", "django-insecure-test-key-for-unit-tests-only")

from .settings import *  # noqa: F403

# Override Database to use an in-memory SQLite for tests
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

# Lowest cost bcrypt accepts, keeps password hashing fast in the suite
PASSWORD_HASH_ROUNDS = 4

SIMPLE_JWT["SIGNING_KEY"] = "test-jwt-signing-key"  # noqa: F405

LOGGING["root"]["level"] = "WARNING"  # noqa: F405
