"""
Engine, session factory and declarative base.

Models subclass Base. Routers receive a request-scoped session
through the get_db() dependency.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from account_service.config import get_settings

settings = get_settings()

# pool_pre_ping replaces pooled connections the server has dropped
# instead of failing the first statement of a deposit on them.
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
)

# Sessions never commit on their own: UnitOfWork owns commit and
# rollback. With autoflush off, INSERT/UPDATE statements only run at
# the explicit flush() calls in AccountService.
SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)


class Base(DeclarativeBase):
    pass


def get_db():
    """Yield one session per request and close it afterwards."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
