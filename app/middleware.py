"""Request logging, panic recovery and the per-route ``track`` hook."""

import sys
import time

from fastapi import Request
from fastapi.responses import JSONResponse
from loguru import logger


def configure_logging(level: str = "INFO") -> None:
    """Replace loguru's default sink with a single stderr sink at ``level``."""
    logger.remove()
    logger.add(sys.stderr, level=level)


async def log_and_recover(request: Request, call_next):
    """Log every request and turn unhandled exceptions into a 500.

    HTTPException never reaches this point; FastAPI renders it further in.
    Anything else (database or cache failures included) aborts only the
    current request.
    """
    ctx = {"method": request.method, "path": request.url.path}
    start = time.perf_counter()

    with logger.contextualize(**ctx):
        logger.info("request.start {} {}", request.method, request.url.path)
        try:
            response = await call_next(request)
        except Exception as exc:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=500,
                duration_ms=round(duration_ms, 1),
                error_type=type(exc).__name__,
            ).exception("request.error")
            return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})

        duration_ms = (time.perf_counter() - start) * 1000
        logger.bind(
            status_code=response.status_code,
            duration_ms=round(duration_ms, 1),
        ).info("request.end {} {}", response.status_code, request.url.path)
        return response


async def track() -> None:
    logger.info("request to /users")
