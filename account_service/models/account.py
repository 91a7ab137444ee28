"""
Customer account model.

The account stores its balance directly. The balance is only
ever changed together with a new cash activity row, so it always
equals the balance_after of the latest activity (or zero when
the account has none).
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import String, DateTime, Numeric
from sqlalchemy.orm import Mapped, mapped_column, relationship

from account_service.models.base import Base


class Account(Base):
    __tablename__ = "accounts"

    id: Mapped[int] = mapped_column(primary_key=True)
    account_number: Mapped[str] = mapped_column(
        String(10), unique=True, nullable=False, index=True
    )
    full_name: Mapped[str] = mapped_column(String(50), nullable=False)
    id_number: Mapped[str] = mapped_column(
        String(16), unique=True, nullable=False
    )
    phone_number: Mapped[str] = mapped_column(
        String(15), unique=True, nullable=False
    )
    balance: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False, default=Decimal("0")
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    # Newest activity last; see CashActivity for the chain itself
    cash_activities: Mapped[list["CashActivity"]] = relationship(
        back_populates="account",
        order_by="CashActivity.id",
    )

    def __repr__(self) -> str:
        return f"<Account {self.account_number} balance={self.balance}>"
