"""Transactional unit helper.

Wraps Protean's UnitOfWork and folds whatever escapes it into the store's
error taxonomy. Business errors pass through untouched; field validation
becomes ``InvalidArgument``; a lost version race becomes the retryable
``Unavailable``; anything else becomes ``Internal``. In every
failure case the unit of work has already rolled back when the caller sees
the exception.
"""

from collections.abc import Iterator
from contextlib import contextmanager

import structlog
from protean import UnitOfWork
from protean.exceptions import ExpectedVersionError, ObjectNotFoundError, ValidationError

from grocery.errors import Internal, NotFound, StoreError, Unavailable, from_validation_error

logger = structlog.get_logger(__name__)


@contextmanager
def atomic(operation: str, **context) -> Iterator[None]:
    try:
        with UnitOfWork():
            yield
    except StoreError:
        raise
    except ExpectedVersionError as exc:
        # Another writer committed the same aggregate first
        logger.warning("unit_of_work_conflict", operation=operation, **context)
        raise Unavailable(operation) from exc
    except ValidationError as exc:
        raise from_validation_error(exc) from exc
    except Exception as exc:
        logger.exception("unit_of_work_failed", operation=operation, **context)
        raise Internal(f"{operation} failed; no changes were applied") from exc


def load(repo, kind: str, identifier):
    """Fetch an aggregate, raising ``NotFound`` when the id is unknown."""
    try:
        return repo.get(str(identifier))
    except ObjectNotFoundError:
        raise NotFound(kind, str(identifier)) from None
