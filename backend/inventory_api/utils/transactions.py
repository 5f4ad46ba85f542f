import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.orm import Session

log = logging.getLogger(__name__)


@contextmanager
def atomic(session: Session) -> Iterator[Session]:
    """
    Run the block as one unit of work on ``session``.

    Commits when the block exits normally and rolls back on any exception, so
    a failed ledger write leaves neither the quantity change nor the movement
    behind. Whatever the session had pending before entering is part of the
    same unit.

    Usage:
        with atomic(db):
            ... DB work ...
    """
    try:
        yield session
        session.commit()
    except Exception:
        log.debug("Rolling back unit of work", exc_info=True)
        session.rollback()
        raise
