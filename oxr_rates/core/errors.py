from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette import status
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

from oxr_rates.services.rates.exceptions import (
    DataAcquisitionFailure,
    UnsupportedCurrency,
)

logger = logging.getLogger("oxr_rates.errors")


def http_error_handler(request: Request, exc: StarletteHTTPException):  # type: ignore
    error = "not_found" if exc.status_code == 404 else "http_error"
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": error, "detail": exc.detail},
    )


def validation_error_handler(request: Request, exc: RequestValidationError):  # type: ignore
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "validation_error",
            "detail": jsonable_errors(exc),
        },
    )


def jsonable_errors(exc: RequestValidationError):
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]


def unsupported_currency_handler(request: Request, exc: UnsupportedCurrency):  # type: ignore
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={
            "error": "unsupported_currency",
            "detail": f"No rate available for currency {exc.currency}",
            "currency": exc.currency,
        },
    )


def data_acquisition_handler(request: Request, exc: DataAcquisitionFailure):  # type: ignore
    logger.error("rates data unavailable: %s", exc)
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"error": "data_acquisition_failure", "detail": str(exc)},
    )


def server_error_handler(request: Request, exc: Exception):  # type: ignore
    logger.exception("unhandled exception")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "internal_error",
            "detail": "An unexpected error occurred.",
        },
    )
