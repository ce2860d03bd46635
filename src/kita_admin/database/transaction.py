from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Callable, ContextManager, Iterator

from sqlalchemy.exc import IntegrityError

from ..core.exceptions import ConstraintViolation

logger = logging.getLogger(__name__)

TransactionFactory = Callable[[], ContextManager[Any]]


@contextmanager
def transaction(session) -> Iterator[Any]:
    """One unit of work: commit on success, roll back on any exception.

    Unique/foreign-key violations that slip past a service pre-check surface
    as ConstraintViolation.
    """
    try:
        yield session
        session.commit()
    except IntegrityError as exc:
        session.rollback()
        logger.warning("Constraint violation: %s", exc.orig)
        raise ConstraintViolation("Der Datensatz verletzt eine Eindeutigkeits- oder Referenzbedingung") from exc
    except Exception:
        session.rollback()
        raise
