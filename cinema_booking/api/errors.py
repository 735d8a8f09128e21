import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from cinema_booking.core.exceptions import CinemaBookingError

logger = logging.getLogger(__name__)


async def domain_error_handler(request: Request, exc: CinemaBookingError) -> JSONResponse:
    logger.warning(
        "%s %s rejected with %s: %s",
        request.method, request.url.path, type(exc).__name__, exc.message,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error": type(exc).__name__},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CinemaBookingError, domain_error_handler)
