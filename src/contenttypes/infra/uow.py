"""
This is the canonical Unit of Work boundary for contenttypes. All transactional changes must go through this.

Do not open ad hoc sessions elsewhere.

Two shapes are provided:

- ``UnitOfWork``: the commit handle owned by the content type service. Repositories
  register pending changes on its session; ``commit()`` flushes everything pending
  since the previous commit as one transaction.
- ``session()``: the outer context manager used by the CLI to open, commit or roll
  back, and close a session around a whole command.
"""

from __future__ import annotations

import contextlib
from collections.abc import Generator

from sqlalchemy.orm import Session

from . import db as _db


class UnitOfWork:
    """Groups repository mutations on a shared session into committed transactions."""

    def __init__(self, db: Session):
        self.session = db

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


@contextlib.contextmanager
def session() -> Generator[Session, None, None]:
    """
    Database session context manager for CLI operations and batch jobs.

    Provides Unit of Work semantics:
    - Opens a DB session
    - Yields it for use
    - On success: commits the transaction
    - On exception: rolls back and re-raises the exception
    - Always closes the session

    Usage:
        with session() as db:
            service = build_content_type_service(db)
            service.save_content_type(content_type)
    """
    db = _db.SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
