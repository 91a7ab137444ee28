"""
Domain exceptions raised by the service layer.

Each exception carries the HTTP status code the API layer answers
with, so the routers never need to know which business rule failed.
"""

from pydantic import BaseModel, ValidationError as PydanticValidationError


class AccountServiceError(Exception):
    """Base class for every error the account operations raise."""

    status_code: int = 500
    message: str = "Internal Server Error"

    def __init__(self, message: str | None = None):
        self.message = message or self.message
        super().__init__(self.message)


class ValidationError(AccountServiceError):
    """
    Malformed input. ``errors`` maps each offending field to the
    reason it was rejected.
    """

    status_code = 400
    message = "Bad Request"

    def __init__(self, errors: dict[str, str], message: str | None = None):
        self.errors = errors
        super().__init__(message)

    @property
    def fields(self) -> list[str]:
        return list(self.errors)

    @staticmethod
    def field_names(*schemas: type[BaseModel]) -> dict[str, str]:
        """Map each field's wire name (its alias, if any) to the attribute name."""
        return {
            field.alias or name: name
            for schema in schemas
            for name, field in schema.model_fields.items()
        }

    @classmethod
    def from_pydantic(
        cls, exc: PydanticValidationError, schema: type[BaseModel]
    ) -> "ValidationError":
        """
        Build from a pydantic error, reporting attribute names
        rather than wire aliases.
        """
        by_alias = cls.field_names(schema)
        errors: dict[str, str] = {}
        for error in exc.errors(include_url=False):
            loc = str(error["loc"][0]) if error["loc"] else "__root__"
            errors.setdefault(by_alias.get(loc, loc), error["msg"])
        return cls(errors)


class DuplicateIDNumber(AccountServiceError):
    status_code = 409
    message = "ID number already registered"


class DuplicatePhoneNumber(AccountServiceError):
    status_code = 409
    message = "phone number already registered"


class AccountNotFound(AccountServiceError):
    status_code = 404
    message = "account not found"


class InsufficientBalance(AccountServiceError):
    status_code = 400
    message = "insufficient balance"


class PersistenceError(AccountServiceError):
    status_code = 500
    message = "Database error"


class TransactionFailed(AccountServiceError):
    status_code = 500
    message = "Failed to record transaction"


class GenerationExhausted(AccountServiceError):
    status_code = 500
    message = "Could not allocate a unique account number"
