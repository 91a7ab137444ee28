"""
Pydantic schemas for deposits and withdrawals.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class CashRequest(BaseModel):
    """Common shape of a deposit or withdrawal."""

    model_config = ConfigDict(populate_by_name=True)

    account_number: str = Field(alias="no_rekening", pattern=r"^\d+$")
    amount: Decimal = Field(alias="nominal", gt=0, max_digits=19, decimal_places=4)
    description: str | None = Field(default=None, max_length=255)


class DepositRequest(CashRequest):
    pass


class WithdrawalRequest(CashRequest):
    pass

