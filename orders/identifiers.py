"""
orders.identifiers

Order identifier generation.

Design goals:
- Large random space (1 .. 2**63-1, cryptographically secure via `secrets`)
- The database decides uniqueness: the candidate is inserted under a savepoint
  and a primary-key collision is retried with a fresh candidate
- Bounded attempts; collisions are never surfaced to the user

========= CHANGE LOG =========
2026-09-10 • Insert-then-retry replaces exists()-then-insert (race between sessions).
"""

from __future__ import annotations

import logging
import secrets
from typing import Callable, Optional, TypeVar

from django.conf import settings
from django.db import IntegrityError, transaction

from pizzastore.exceptions import ConflictError, StoreError

logger = logging.getLogger(__name__)

ORDER_ID_MAX: int = 2**63 - 1  # signed BIGINT upper bound

T = TypeVar("T")


def generate_order_id() -> int:
    """A single candidate in [1, ORDER_ID_MAX]."""
    return secrets.randbelow(ORDER_ID_MAX) + 1


def _max_tries() -> int:
    return int(getattr(settings, "PIZZASTORE", {}).get("ORDER_ID_MAX_TRIES", 10))


def _insert_once(create: Callable[[int], T], exists: Callable[[int], bool], candidate: int) -> T:
    try:
        with transaction.atomic():
            return create(candidate)
    except IntegrityError:
        # Only a taken key is a collision; any other constraint failure propagates.
        if exists(candidate):
            raise ConflictError(f"Order id {candidate} already taken.")
        raise


def insert_with_unique_id(
    create: Callable[[int], T],
    *,
    exists: Callable[[int], bool],
    max_tries: Optional[int] = None,
) -> T:
    """
    Call `create(candidate)` until it inserts without a key collision.

    `create` must perform the INSERT (e.g. `Order.objects.create(order_id=c, ...)`).
    `exists(candidate)` is consulted only after an IntegrityError, to tell a
    collision (retry) from any other constraint failure (re-raise).
    """
    tries = max_tries if max_tries is not None else _max_tries()
    if tries < 1:
        tries = 1

    last: Optional[int] = None
    for attempt in range(1, tries + 1):
        last = generate_order_id()
        try:
            return _insert_once(create, exists, last)
        except ConflictError as exc:
            logger.warning(
                "order_id_collision",
                extra={"event": "order_id_collision", "attempt": attempt, "detail": exc.message},
            )

    logger.error(
        "order_id_exhausted",
        extra={"event": "order_id_exhausted", "tries": tries, "last": last},
    )
    raise StoreError()
