"""Main FastAPI application."""
import time
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from pictureteam.api import auth, categories, images, users
from pictureteam.config import Settings, settings as default_settings
from pictureteam.constants import GENERIC_ERROR_MESSAGE
from pictureteam.database import create_db_engine, create_session_factory, init_db
from pictureteam.services import Services, build_services
from pictureteam.utils.exceptions import AppException, UnexpectedError, ValidationError
from pictureteam.utils.logger import configure_logging, logger


def create_app(settings: Optional[Settings] = None, services: Optional[Services] = None) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Settings to use; defaults to the environment-loaded ones
        services: Pre-built services; when omitted they are built from
            settings and the schema is created on startup

    Returns:
        Configured FastAPI app
    """
    settings = settings or default_settings
    configure_logging(settings)
    engine = None

    if services is None:
        engine = create_db_engine(settings)
        services = build_services(settings, create_session_factory(engine))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if engine is not None:
            # Create database tables (in production, use migrations)
            init_db(engine)
        logger.info(f"Server start on {settings.api_host}:{settings.api_port}")
        yield
        if engine is not None:
            engine.dispose()

    app = FastAPI(
        title="Picture Team API",
        description="Backend API for sharing, categorizing and rating images",
        version="0.1.0",
        docs_url="/docs" if settings.api_docs else None,
        redoc_url="/redoc" if settings.api_docs else None,
        openapi_url="/openapi.json" if settings.api_docs else None,
        lifespan=lifespan,
    )
    app.state.services = services

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            f"{request.method} {request.url.path} {response.status_code} {elapsed_ms:.1f}ms"
        )
        return response

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        if isinstance(exc, UnexpectedError):
            return JSONResponse(status_code=exc.status_code, content={"message": GENERIC_ERROR_MESSAGE})
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        # Malformed bodies, query parameters and path ids
        logger.debug(f"Rejected request to {request.url.path}: {exc.errors()}")
        return JSONResponse(status_code=ValidationError.status_code, content={"message": ValidationError.message})

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
        return JSONResponse(status_code=500, content={"message": GENERIC_ERROR_MESSAGE})

    # Include routers
    app.include_router(auth.router)
    app.include_router(categories.router)
    app.include_router(images.router)
    app.include_router(users.router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()


def run() -> None:
    """Serve the app with uvicorn."""
    uvicorn.run(app, host=default_settings.api_host, port=default_settings.api_port)
