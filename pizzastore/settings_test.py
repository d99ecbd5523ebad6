# pizzastore/settings_test.py
"""
Test settings: deterministic secret, file-backed SQLite, fast password hashing.

The test database is a file so threads in orders/tests/test_concurrency.py
each get their own connection to the same data. IMMEDIATE transactions take
the writer lock at BEGIN; concurrent writers wait on `timeout` instead of
failing a read-to-write lock upgrade.
"""
import os

os.environ.setdefault("DJANGO_SECRET_KEY", "pizzastore-test-secret")

from .settings import *  # noqa: E402,F401,F403

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "test_pizzastore.sqlite3",  # noqa: F405
        "OPTIONS": {"timeout": 30, "transaction_mode": "IMMEDIATE"},
        "TEST": {"NAME": BASE_DIR / "test_pizzastore.sqlite3"},  # noqa: F405
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

PIZZASTORE = {
    "RECENT_ORDERS_LIMIT": 5,
    "ORDER_ID_MAX_TRIES": 10,
    "LOGIN_ATTEMPTS": 3,
}
