"""Error handlers untuk FastAPI application."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from src.core.exceptions import SiKertasError

logger = logging.getLogger(__name__)


def add_error_handlers(app: FastAPI):
    """Register handlers that turn domain errors into JSON responses."""

    @app.exception_handler(SiKertasError)
    async def sikertas_error_handler(request: Request, exc: SiKertasError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        else:
            logger.info(f"{request.method} {request.url.path} rejected: {exc.message}")

        content = {"detail": exc.message}
        if exc.details:
            content.update(exc.details)
        return JSONResponse(status_code=exc.status_code, content=content)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Terjadi kesalahan pada server"},
        )
