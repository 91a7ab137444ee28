"""
Account service: registration, deposits, withdrawals and balances.

Deposits and withdrawals each run as one atomic unit:
1. Lock the account row (SELECT ... FOR UPDATE)
2. Check business rules (sufficient balance for withdrawals)
3. Find the latest cash activity to link the new one to
4. Insert the new cash activity
5. Write the new balance to the account
6. Commit

If anything in steps 3-6 fails, the unit rolls back and neither
the activity nor the balance change is persisted.
"""

import logging
from decimal import Decimal
from typing import Any, Mapping, TypeVar

from pydantic import BaseModel, ValidationError as PydanticValidationError
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from account_service.config import get_settings
from account_service.errors import (
    AccountNotFound,
    DuplicateIDNumber,
    DuplicatePhoneNumber,
    InsufficientBalance,
    PersistenceError,
    TransactionFailed,
    ValidationError,
)
from account_service.models.account import Account
from account_service.models.cash_activity import CashActivity
from account_service.models.enums import ActivityType
from account_service.schemas.account import AccountNumberQuery, RegisterRequest
from account_service.schemas.cash_activity import (
    CashRequest,
    DepositRequest,
    WithdrawalRequest,
)
from account_service.services.account_number import AccountNumberGenerator
from account_service.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)

DEFAULT_DESCRIPTIONS = {
    ActivityType.CREDIT: "Cash deposit",
    ActivityType.DEBIT: "Cash withdrawal",
}


class AccountService:
    """
    All account operations pass through this service.

    Unlike a plain repository, the service owns its transaction
    boundaries: every write operation opens a UnitOfWork and the
    caller never has to commit.
    """

    def __init__(
        self,
        db: Session,
        number_generator: AccountNumberGenerator | None = None,
    ):
        self.db = db
        self.number_generator = number_generator or AccountNumberGenerator(
            db, max_attempts=get_settings().ACCOUNT_NUMBER_MAX_ATTEMPTS
        )

    @staticmethod
    def _validate(schema: type[SchemaT], request: SchemaT | Mapping[str, Any]) -> SchemaT:
        """Accept an already-validated schema or validate a raw mapping."""
        if isinstance(request, schema):
            return request
        try:
            return schema.model_validate(request)
        except PydanticValidationError as exc:
            raise ValidationError.from_pydantic(exc, schema) from exc

    # --- Registration ---

    def register(self, request: RegisterRequest | Mapping[str, Any]) -> Account:
        """
        Register a new account with a freshly allocated number.

        Raises DuplicateIDNumber or DuplicatePhoneNumber when the
        owner's identity is already on file. The account is only
        visible to others once the unit commits.
        """
        request = self._validate(RegisterRequest, request)

        try:
            with UnitOfWork(self.db):
                if self._exists(Account.id_number, request.id_number):
                    logger.warning("Registration rejected: duplicate ID number")
                    raise DuplicateIDNumber()

                if self._exists(Account.phone_number, request.phone_number):
                    logger.warning("Registration rejected: duplicate phone number")
                    raise DuplicatePhoneNumber()

                account = Account(
                    account_number=self.number_generator.allocate(),
                    full_name=request.full_name,
                    id_number=request.id_number,
                    phone_number=request.phone_number,
                    balance=Decimal("0"),
                )
                self.db.add(account)
                self.db.flush()
        except SQLAlchemyError as exc:
            logger.error("Failed to create account", exc_info=True)
            raise PersistenceError("failed to create account") from exc

        logger.info("Registered account %s", account.account_number)
        return account

    def _exists(self, column, value: str) -> bool:
        return self.db.execute(
            select(Account.id).where(column == value)
        ).first() is not None

    # --- Deposits and withdrawals ---

    def deposit(self, request: DepositRequest | Mapping[str, Any]) -> Account:
        """Credit an account. Returns the account with its new balance."""
        request = self._validate(DepositRequest, request)
        return self._record(request, ActivityType.CREDIT)

    def withdraw(self, request: WithdrawalRequest | Mapping[str, Any]) -> Account:
        """
        Debit an account. Returns the account with its new balance.

        The balance check happens under the same row lock as the
        write, so two concurrent withdrawals can never both pass
        against the same funds.
        """
        request = self._validate(WithdrawalRequest, request)
        return self._record(request, ActivityType.DEBIT)

    def _record(self, request: CashRequest, activity_type: ActivityType) -> Account:
        try:
            with UnitOfWork(self.db):
                account = self._lock_account(request.account_number)

                if (
                    activity_type == ActivityType.DEBIT
                    and request.amount > account.balance
                ):
                    logger.warning(
                        "Withdrawal rejected for account %s: insufficient balance",
                        account.account_number,
                    )
                    raise InsufficientBalance()

                activity = self._append_activity(
                    account,
                    activity_type,
                    request.amount,
                    request.description or DEFAULT_DESCRIPTIONS[activity_type],
                )
        except SQLAlchemyError as exc:
            logger.error(
                "Failed to record %s for account %s",
                activity_type.value, request.account_number,
                exc_info=True,
            )
            raise TransactionFailed() from exc

        logger.info(
            "Recorded %s of %s on account %s (activity %s)",
            activity_type.value, request.amount,
            request.account_number, activity.id,
        )
        return account

    def _lock_account(self, account_number: str) -> Account:
        """
        Load an account and lock its row until the unit ends.

        populate_existing overwrites an instance already in the identity
        map, so the balance checked is the one read under the lock.
        """
        try:
            account = self.db.execute(
                select(Account)
                .where(Account.account_number == account_number)
                .with_for_update()
                .execution_options(populate_existing=True)
            ).scalar_one_or_none()
        except SQLAlchemyError as exc:
            logger.error("Failed to get account", exc_info=True)
            raise PersistenceError() from exc

        if not account:
            raise AccountNotFound()
        return account

    def _latest_activity(self, account_id: int) -> CashActivity | None:
        # Inserts are serialised by the account row lock, so id order
        # is insertion order. created_at is a client clock and can step back.
        return self.db.execute(
            select(CashActivity)
            .where(CashActivity.account_id == account_id)
            .order_by(CashActivity.id.desc())
            .limit(1)
        ).scalar_one_or_none()

    def _append_activity(
        self,
        account: Account,
        activity_type: ActivityType,
        amount: Decimal,
        description: str,
    ) -> CashActivity:
        """
        Insert the next activity in the account's chain and move
        the balance to match it.

        Must run inside the caller's UnitOfWork.
        """
        previous = self._latest_activity(account.id)

        balance_before = account.balance
        if activity_type == ActivityType.CREDIT:
            balance_after = balance_before + amount
        else:
            balance_after = balance_before - amount

        activity = CashActivity(
            account_id=account.id,
            reference_id=previous.id if previous else None,
            activity_type=activity_type,
            amount=amount,
            balance_before=balance_before,
            balance_after=balance_after,
            description=description,
        )
        self.db.add(activity)
        self.db.flush()

        account.balance = balance_after
        self.db.flush()
        return activity

    # --- Queries ---

    def get_balance(self, account_number: str) -> Account:
        """Return the account, whose balance is read in a single query."""
        query = self._validate(AccountNumberQuery, {"no_rekening": account_number})

        try:
            account = self.db.execute(
                select(Account).where(Account.account_number == query.account_number)
            ).scalar_one_or_none()
        except SQLAlchemyError as exc:
            logger.error("Failed to get account", exc_info=True)
            raise PersistenceError() from exc

        if not account:
            raise AccountNotFound()
        return account
