"""
Account number allocation.

Numbers are random 10-digit strings. A candidate is only handed out
after the store confirms no account already uses it.
"""

import logging
import random
from typing import Callable

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from account_service.errors import GenerationExhausted, PersistenceError
from account_service.models.account import Account

logger = logging.getLogger(__name__)

ACCOUNT_NUMBER_MIN = 1_000_000_000
ACCOUNT_NUMBER_MAX = 9_999_999_999

_rng = random.SystemRandom()


def generate_account_number() -> str:
    """Return a random candidate in [1_000_000_000, 9_999_999_999)."""
    return str(_rng.randrange(ACCOUNT_NUMBER_MIN, ACCOUNT_NUMBER_MAX))


class AccountNumberGenerator:
    """
    Draws candidates until one is free in the accounts table.

    ``generate`` is injectable so tests can force collisions.
    """

    def __init__(
        self,
        db: Session,
        max_attempts: int,
        generate: Callable[[], str] = generate_account_number,
    ):
        self.db = db
        self.max_attempts = max_attempts
        self.generate = generate

    def is_taken(self, account_number: str) -> bool:
        try:
            existing = self.db.execute(
                select(Account.id).where(Account.account_number == account_number)
            ).first()
        except SQLAlchemyError as exc:
            logger.error("Error checking for unique account number", exc_info=True)
            raise PersistenceError() from exc
        return existing is not None

    def allocate(self) -> str:
        """
        Return an account number no existing account uses.

        Raises GenerationExhausted after max_attempts collisions.
        """
        for attempt in range(1, self.max_attempts + 1):
            candidate = self.generate()
            if not self.is_taken(candidate):
                return candidate
            logger.debug(
                "Account number collision on attempt %d/%d",
                attempt, self.max_attempts,
            )

        logger.error(
            "No free account number after %d attempts", self.max_attempts
        )
        raise GenerationExhausted()
