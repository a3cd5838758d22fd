"""FastAPI application for the iframe relay."""

from __future__ import annotations
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from iframe_relay import (
    Extractor,
    ExtractionError,
    IframeResolver,
    NotConfiguredError,
    ValidationError,
)
from iframe_relay.utils import (
    CacheFileSys,
    ConfigStore,
    IframeExtractor,
    cleanup_logger,
    create_logger,
    create_sub_logger,
)

from .config import CORS_ORIGINS, LOGGER_NAME, RelaySettings
from .api.routes import router


def create_app(
    settings: Optional[RelaySettings] = None,
    extractor: Optional[Extractor] = None,
    config_store: Optional[ConfigStore] = None,
    cache_store: Optional[CacheFileSys] = None,
) -> FastAPI:
    """Build the app. Collaborators not passed in are created at startup."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Initialize stores, extractor and resolver on startup."""
        cfg = settings or RelaySettings.from_env()
        logger, _ = create_logger(LOGGER_NAME, cfg.log_dir, enable_console=cfg.log_console)

        app.state.logger = logger
        app.state.config_store = config_store or ConfigStore(cfg.config_file)
        app.state.cache_store = cache_store or CacheFileSys(cfg.cache_file)
        app.state.resolver = IframeResolver(
            cache=app.state.cache_store,
            extractor=extractor or IframeExtractor(logger=create_sub_logger(logger, "extractor")),
            logger=create_sub_logger(logger, "resolver"),
            expiry_ms=cfg.cache_expiry_ms,
        )
        logger.info(f"Config file: {app.state.config_store.config_file}")
        logger.info(f"Cache file: {app.state.cache_store.cache_file}")

        yield

        cleanup_logger(logger)

    app = FastAPI(title="Iframe Relay", lifespan=lifespan)

    # CORS: any origin may embed or query the relay
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        return JSONResponse(status_code=400, content={"error": str(exc)})

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    @app.exception_handler(NotConfiguredError)
    async def not_configured_handler(request: Request, exc: NotConfiguredError):
        return JSONResponse(status_code=404, content={"error": str(exc)})

    @app.exception_handler(ExtractionError)
    async def extraction_error_handler(request: Request, exc: ExtractionError):
        request.app.state.logger.error(f"Extraction failed for {exc.page_url or '<empty>'}: {exc}")
        return JSONResponse(status_code=500, content={"error": "Failed to get iframe URL"})

    app.include_router(router)

    return app


app = create_app()
