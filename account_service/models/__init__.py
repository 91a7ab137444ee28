"""
Database models package.

All models must be imported here so that Alembic can discover
them through Base.metadata when generating migrations.
"""

from account_service.models.base import Base
from account_service.models.enums import ActivityType
from account_service.models.account import Account
from account_service.models.cash_activity import CashActivity

__all__ = [
    "Base",
    "ActivityType",
    "Account",
    "CashActivity",
]
