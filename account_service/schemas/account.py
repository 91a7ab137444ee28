"""
Pydantic schemas for account registration and balance queries.

Request field aliases (nama, nik, no_hp) are the names clients
send on the wire. populate_by_name lets Python callers use the
attribute names instead.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """Request to register a new customer account."""

    model_config = ConfigDict(populate_by_name=True)

    full_name: str = Field(alias="nama", min_length=1, max_length=50)
    id_number: str = Field(alias="nik", pattern=r"^\d{16}$")
    phone_number: str = Field(alias="no_hp", pattern=r"^\d{1,15}$")


class AccountNumberQuery(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    account_number: str = Field(alias="no_rekening", pattern=r"^\d+$")


class AccountResponse(BaseModel):
    id: int
    account_number: str
    full_name: str
    id_number: str
    phone_number: str
    balance: Decimal
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class BalanceResponse(BaseModel):
    saldo: Decimal
