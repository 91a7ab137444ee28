"""
Account Service: FastAPI Application.

This is the entry point for the application.
All routers and error handlers are registered here.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from account_service.config import get_settings
from account_service.errors import AccountServiceError, ValidationError
from account_service.logging_config import setup_logging
from account_service.api.health import router as health_router
from account_service.api.accounts import router as accounts_router
from account_service.schemas.account import RegisterRequest
from account_service.schemas.cash_activity import CashRequest
from account_service.schemas.response import ErrorDetails

settings = get_settings()
setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Customer accounts with a linked cash-activity ledger",
    docs_url=None if settings.is_production else "/v1/docs",
)

# Register routers
app.include_router(health_router)
app.include_router(accounts_router)

# Wire aliases (nama, no_rekening, ...) back to attribute names in
# validation responses, matching what the service layer reports.
_FIELD_NAMES = ValidationError.field_names(RegisterRequest, CashRequest)


def _error_response(status_code: int, message: str, errors=None) -> JSONResponse:
    body = ErrorDetails(code=status_code, message=message, errors=errors)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
    )


@app.exception_handler(AccountServiceError)
async def handle_service_error(request: Request, exc: AccountServiceError):
    errors = exc.errors if isinstance(exc, ValidationError) else None
    return _error_response(exc.status_code, exc.message, errors)


@app.exception_handler(RequestValidationError)
async def handle_request_validation(request: Request, exc: RequestValidationError):
    errors: dict[str, str] = {}
    for error in exc.errors():
        # loc is ("body", field) or ("path", field)
        loc = [str(part) for part in error["loc"][1:]] or ["__root__"]
        errors.setdefault(_FIELD_NAMES.get(loc[0], loc[0]), error["msg"])
    return _error_response(400, "Bad Request", errors)


@app.exception_handler(StarletteHTTPException)
async def handle_http_error(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return _error_response(404, "Endpoint Not Found")
    return _error_response(exc.status_code, str(exc.detail))


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception):
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return _error_response(500, "Internal Server Error")


def run() -> None:
    """Serve the application with uvicorn using HOST/PORT settings."""
    import uvicorn

    uvicorn.run(
        "account_service.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
