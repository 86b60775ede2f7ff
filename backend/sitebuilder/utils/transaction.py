from contextlib import contextmanager
from sqlalchemy.exc import SQLAlchemyError
from sitebuilder.extensions import db
from sitebuilder.domain.invariants.exceptions import PersistenceFailure

@contextmanager
def transactional(failure_message: str = "The change could not be saved; nothing was modified."):
    """
    Context manager for database transactions.

    Store errors surface as PersistenceFailure after the rollback, so the
    caller knows the previous state is intact.
    """
    try:
        yield
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        raise PersistenceFailure(failure_message) from exc
    except Exception:
        db.session.rollback()
        raise
