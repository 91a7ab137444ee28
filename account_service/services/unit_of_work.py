"""
Atomic unit of work over a SQLAlchemy session.

Everything written inside a ``with UnitOfWork(db):`` block is
committed together when the block exits normally, and rolled back
when it exits with an exception. There is no exit path that leaves
the session with uncommitted writes.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class UnitOfWork:

    def __init__(self, db: Session):
        self.db = db

    def __enter__(self) -> "UnitOfWork":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is not None:
            self.rollback()
            return False

        try:
            self.commit()
        except SQLAlchemyError:
            logger.error("Commit failed, rolling back", exc_info=True)
            self.rollback()
            raise
        return False

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
