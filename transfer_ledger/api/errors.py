"""
HTTP error mapping

Every failure leaves the service as {"error": ..., "code": ..., "path": ...}.
"""

from typing import Dict, Type

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..errors import (
    LedgerError, InvalidIdentifier, NotFound, DuplicateEntity,
    InvalidAmount, InsufficientFunds, MalformedInput
)
from ..logging_config import get_logger


logger = get_logger("transfer_ledger.api")

# Insufficient funds is 409 here (transfers); the direct withdrawal endpoint
# reports the same condition as 403, see WITHDRAW_STATUS_CODES.
STATUS_CODES: Dict[Type[LedgerError], int] = {
    InvalidIdentifier: status.HTTP_400_BAD_REQUEST,
    NotFound: status.HTTP_404_NOT_FOUND,
    DuplicateEntity: status.HTTP_409_CONFLICT,
    InvalidAmount: status.HTTP_409_CONFLICT,
    InsufficientFunds: status.HTTP_409_CONFLICT,
    MalformedInput: status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
}

WITHDRAW_STATUS_CODES: Dict[Type[LedgerError], int] = {
    **STATUS_CODES,
    InsufficientFunds: status.HTTP_403_FORBIDDEN,
}


def status_for(error: LedgerError, table: Dict[Type[LedgerError], int] = STATUS_CODES) -> int:
    """Look up the HTTP status of an error, walking up its class hierarchy"""
    for cls in type(error).__mro__:
        if cls in table:
            return table[cls]
    return status.HTTP_400_BAD_REQUEST


def error_response(request: Request, status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": message, "code": status_code, "path": request.url.path}
    )


class LedgerHTTPError(Exception):
    """A ledger error paired with the status code a specific route reports"""

    def __init__(self, error: LedgerError, status_code: int):
        super().__init__(error.message)
        self.error = error
        self.status_code = status_code


def _entity_name(path: str) -> str:
    return "Transaction" if path.startswith("/transactions") else "Account"


def _validation_to_ledger_error(request: Request, exc: RequestValidationError) -> LedgerError:
    """Path segments that are not integers are 400s; bad bodies are 415s"""
    errors = exc.errors()
    for err in errors:
        loc = err.get("loc") or ()
        if loc and loc[0] == "path":
            value = err.get("input")
            name = loc[-1] if len(loc) > 1 else "id"
            return InvalidIdentifier(f"Invalid {name}: {value!r} is not an integer")

    cause = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ())[1:]) or 'body'}: {err.get('msg')}"
        for err in errors
    )
    entity = _entity_name(request.url.path)
    return MalformedInput(f"Unable to parse {entity} JSON request body! Cause: {cause}")


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers that shape every failure into the error payload"""

    @app.exception_handler(LedgerError)
    async def ledger_error_handler(request: Request, exc: LedgerError):
        return error_response(request, status_for(exc), exc.message)

    @app.exception_handler(LedgerHTTPError)
    async def ledger_http_error_handler(request: Request, exc: LedgerHTTPError):
        return error_response(request, exc.status_code, exc.error.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        error = _validation_to_ledger_error(request, exc)
        logger.info("Rejected request to %s: %s", request.url.path, error.message)
        return error_response(request, status_for(error), error.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return error_response(request, exc.status_code, str(exc.detail))
