from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import PersistenceError
from .connection import DatabaseConnection


@contextmanager
def db_session(conn: DatabaseConnection) -> Iterator[Session]:
    """Commit on success, roll back on error.

    Database errors leave as PersistenceError.
    """

    session = conn.session()
    try:
        yield session
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        raise PersistenceError("Database operation failed") from e
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
