"""
Cash activity model.

Each row records one deposit (credit) or withdrawal (debit)
against an account. Rows are append-only: once written they are
never modified or deleted.

reference_id points at the previous activity of the same account,
so the rows of one account form a singly-linked chain. The first
activity of an account has no reference.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    DateTime, Numeric, ForeignKey, Text,
    Enum as SAEnum,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from account_service.models.base import Base
from account_service.models.enums import ActivityType


class CashActivity(Base):
    """
    An immutable balance-changing event.

    For every row:
        credit: balance_after == balance_before + amount
        debit:  balance_after == balance_before - amount
    and balance_before equals the balance_after of the referenced
    previous row. These rules are enforced by AccountService.
    """

    __tablename__ = "cash_activities"

    id: Mapped[int] = mapped_column(primary_key=True)
    account_id: Mapped[int] = mapped_column(
        ForeignKey("accounts.id"), nullable=False, index=True
    )
    reference_id: Mapped[int | None] = mapped_column(
        ForeignKey("cash_activities.id"), nullable=True
    )
    activity_type: Mapped[ActivityType] = mapped_column(
        SAEnum(
            ActivityType,
            name="activity_type_enum",
            values_callable=lambda e: [m.value for m in e],
            create_constraint=True,
        ),
        nullable=False,
    )
    amount: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False
    )
    balance_before: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False
    )
    balance_after: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    account: Mapped["Account"] = relationship(back_populates="cash_activities")
    reference: Mapped["CashActivity | None"] = relationship(
        remote_side=[id]
    )

    def __repr__(self) -> str:
        return (
            f"<CashActivity {self.activity_type.value} {self.amount} "
            f"{self.balance_before}->{self.balance_after}>"
        )
