"""
FastAPI entrypoint for the RideConnect backend application.
"""
from contextlib import asynccontextmanager
import logging
import time
from typing import Optional
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.core.config import Settings
from app.core.exceptions import AppError, ValidationError
from app.core.logging import setup_logging
from app.core.security import TokenService
from app.core.utils import format_error
from app.db.session import create_db_engine, create_session_factory, init_db
from app.api.router import api_router

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application from an explicit settings object."""
    settings = settings or Settings()
    setup_logging(settings.LOG_LEVEL)

    engine = create_db_engine(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        init_db(engine)
        if settings.SEED_ON_STARTUP:
            from app.db.seed import seed_initial_data
            db = app.state.session_factory()
            try:
                seed_initial_data(db, settings.SEED_DATA_DIR)
            finally:
                db.close()
        logger.info(f"{settings.APP_NAME} API started")
        yield
        engine.dispose()
        logger.info(f"{settings.APP_NAME} API stopped")

    app = FastAPI(
        title="RideConnect API",
        description="Backend API for campus ride sharing",
        version="1.0.0",
        debug=settings.DEBUG,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.token_service = TokenService.from_settings(settings)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.info(f"{request.method} {request.url.path} 500 {elapsed_ms:.1f}ms")
            raise
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(f"{request.method} {request.url.path} {response.status_code} {elapsed_ms:.1f}ms")
        return response

    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
            return JSONResponse(status_code=exc.status_code, content=format_error("Unexpected server error", exc.code))
        return JSONResponse(status_code=exc.status_code, content=format_error(exc.message, exc.code))

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        error = ValidationError()
        return JSONResponse(
            status_code=error.status_code,
            content=format_error(error.message, error.code, jsonable_encoder(exc.errors())),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=format_error("Unexpected server error", "unexpected_error"),
        )

    # Include API routes
    app.include_router(api_router, prefix="/api")

    @app.get("/")
    async def root():
        """Health check endpoint."""
        return {"message": "RideConnect API is running"}

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()
