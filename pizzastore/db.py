"""
pizzastore.db

Store call wrapper: every ORM round-trip made by a service runs inside
`store_errors(...)` so transport/query failures surface as StoreError.
"""
from contextlib import contextmanager
import logging

from django.db import DatabaseError

from pizzastore.exceptions import StoreError

logger = logging.getLogger(__name__)


@contextmanager
def store_errors(operation: str):
    try:
        yield
    except DatabaseError as exc:
        logger.exception(
            "store_error",
            extra={"event": "store_error", "operation": operation},
        )
        raise StoreError() from exc
