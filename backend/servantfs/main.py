"""Servant FS FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from servantfs import __version__
from servantfs.config import settings
from servantfs.exceptions import ActionRequestError, FieldValidationError, PathNotFoundError
from servantfs.services import init_services, shutdown_services

logger = logging.getLogger(__name__)

INVALID_REQUEST = "The request is invalid."


@asynccontextmanager
async def _lifespan(app: FastAPI):
    """Startup / shutdown lifecycle."""
    _setup_logging()
    init_services()
    logger.info("Servant FS v%s started — listening on %s:%s", __version__, settings.host, settings.port)
    try:
        yield
    finally:
        shutdown_services()
        logger.info("Servant FS shutting down")


def _setup_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


async def _field_validation_handler(request: Request, exc: FieldValidationError) -> JSONResponse:
    logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.errors)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": INVALID_REQUEST, "errors": exc.errors},
    )


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors: dict[str, list[str]] = {}
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p not in ("query", "body", "path", "header")]
        field = loc[-1][:1].upper() + loc[-1][1:] if loc else "Request"
        errors.setdefault(field, []).append(err.get("msg", "Invalid value"))
    return await _field_validation_handler(request, FieldValidationError(errors))


async def _action_request_handler(request: Request, exc: ActionRequestError) -> JSONResponse:
    logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": exc.message})


async def _not_found_handler(request: Request, exc: PathNotFoundError) -> JSONResponse:
    logger.info("%s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


async def _host_error_handler(request: Request, exc: OSError) -> JSONResponse:
    logger.error("%s %s failed: %s: %s", request.method, request.url.path, type(exc).__name__, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": "An error has occurred.",
            "exception_type": type(exc).__name__,
            "exception_message": str(exc),
        },
    )


def create_app() -> FastAPI:
    """Application factory."""
    from servantfs.api.routes import api_router

    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        debug=settings.debug,
        lifespan=_lifespan,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(FieldValidationError, _field_validation_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(ActionRequestError, _action_request_handler)
    app.add_exception_handler(PathNotFoundError, _not_found_handler)
    app.add_exception_handler(OSError, _host_error_handler)

    app.include_router(api_router, prefix=settings.api_prefix)
    return app


app = create_app()


def run(**kwargs: Any) -> None:
    import uvicorn

    uvicorn.run(
        "servantfs.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        workers=settings.uvicorn_workers,
        log_level=settings.log_level.lower(),
        **kwargs,
    )


if __name__ == "__main__":
    run()
