"""Business logic services."""

from account_service.services.account_number import AccountNumberGenerator
from account_service.services.account_service import AccountService
from account_service.services.unit_of_work import UnitOfWork

__all__ = ["AccountNumberGenerator", "AccountService", "UnitOfWork"]
