"""
Account API endpoints.

The API layer is thin: it parses the request, calls AccountService
and wraps the result in the success envelope. Domain errors are
turned into error envelopes by the handlers registered in main.py.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from account_service.models.base import get_db
from account_service.services.account_service import AccountService
from account_service.schemas.account import (
    RegisterRequest,
    AccountResponse,
    BalanceResponse,
)
from account_service.schemas.cash_activity import DepositRequest, WithdrawalRequest
from account_service.schemas.response import SuccessWithData

router = APIRouter(prefix="/v1", tags=["Accounts"])


@router.post("/daftar", response_model=SuccessWithData, status_code=201)
def register(
    request: RegisterRequest,
    db: Session = Depends(get_db),
):
    """Register a new customer account."""
    account = AccountService(db).register(request)
    return SuccessWithData(
        code=201,
        message="Account registration successful",
        data=AccountResponse.model_validate(account),
    )


@router.post("/tabung", response_model=SuccessWithData)
def deposit(
    request: DepositRequest,
    db: Session = Depends(get_db),
):
    """Deposit money into an account."""
    account = AccountService(db).deposit(request)
    return SuccessWithData(
        code=200,
        message="Deposit successful",
        data=BalanceResponse(saldo=account.balance),
    )


@router.post("/tarik", response_model=SuccessWithData)
def withdraw(
    request: WithdrawalRequest,
    db: Session = Depends(get_db),
):
    """
    Withdraw money from an account.

    Rejected with 400 when the balance does not cover the amount.
    """
    account = AccountService(db).withdraw(request)
    return SuccessWithData(
        code=200,
        message="Withdrawal successful",
        data=BalanceResponse(saldo=account.balance),
    )


@router.get("/saldo/{account_number}", response_model=SuccessWithData)
def get_balance(
    account_number: str,
    db: Session = Depends(get_db),
):
    """Get the current balance of an account."""
    account = AccountService(db).get_balance(account_number)
    return SuccessWithData(
        code=200,
        message="Get balance successful",
        data=BalanceResponse(saldo=account.balance),
    )
