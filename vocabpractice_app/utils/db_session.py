"""Session helpers for SQLite-backed deployments.

SQLite holds a database-wide write lock for the length of a transaction, so
two overlapping writes can fail with ``database is locked``. A rolled back
transaction has lost its pending rows, which means retrying only the commit
is not enough: :func:`run_with_retry` runs the whole unit of work again.
"""

from __future__ import annotations

import time
from typing import Callable, TypeVar

from sqlalchemy.exc import OperationalError
from sqlalchemy.orm.session import Session

T = TypeVar("T")

LOCK_ERROR_FRAGMENTS = ("database is locked", "database is busy")


def is_lock_error(error: OperationalError) -> bool:
    text = str(error).lower()
    return any(fragment in text for fragment in LOCK_ERROR_FRAGMENTS)


def run_with_retry(
    session: Session,
    work: Callable[[], T],
    retries: int = 5,
    initial_delay: float = 0.1,
) -> T:
    """Call ``work()`` and commit; on a lock error roll back and start over.

    The wait between attempts starts at ``initial_delay`` seconds and doubles
    each time. Any other error, or a lock error on the last attempt,
    propagates. Non-``OperationalError`` failures are not rolled back here;
    the caller owns that.

    Returns:
        The value ``work`` returned on the attempt that committed.
    """

    if retries < 1:
        raise ValueError("retries must be at least 1")

    delay = initial_delay
    attempt = 1
    while True:
        try:
            result = work()
            session.commit()
            return result
        except OperationalError as exc:
            session.rollback()
            if attempt >= retries or not is_lock_error(exc):
                raise
        time.sleep(delay)
        delay *= 2
        attempt += 1
