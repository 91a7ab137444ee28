"""
JSON envelopes shared by every endpoint.

Successful responses carry their payload under ``data``; failed
ones carry a message and, for validation failures, a field map
under ``errors``.
"""

from typing import Any

from pydantic import BaseModel


class Common(BaseModel):
    code: int
    status: str
    message: str


class SuccessWithData(Common):
    status: str = "success"
    data: Any


class ErrorDetails(Common):
    status: str = "error"
    errors: dict[str, str] | None = None
