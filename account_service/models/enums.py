"""
Shared enumerations for database models.
"""

import enum


class ActivityType(str, enum.Enum):
    """Direction of a cash activity against an account balance."""
    CREDIT = "credit"
    DEBIT = "debit"
