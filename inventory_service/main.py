"""
Inventory Catalog Service
Facilities, subarea hierarchies, products and inventory items per tenant,
served over a REST mirror and an RPC-style transport.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from typing import Optional
from sqlalchemy.engine import Engine
import subprocess
import os
import time

from inventory_service.core import ServiceHealth, setup_logging, RequestLoggingMiddleware, get_logger
from inventory_service.core_settings import Settings, get_settings
from inventory_service.auth.verifier import CredentialVerifier
from inventory_service.application.dispatcher import AuthorizationDispatcher
from inventory_service.application.gateway import PersistenceGateway
from inventory_service.infrastructure.db import create_engine_from_settings, make_session_factory, init_models
from inventory_service.api.routes import router as inventory_router
from inventory_service.api.rpc import router as rpc_router

SERVICE_DESCRIPTION = "Multi-tenant inventory catalog microservice"
PROJECT_ROOT = os.path.join(os.path.dirname(__file__), "..")

logger = get_logger(__name__)

def run_migrations() -> None:
    logger.info("Running database migrations")
    result = subprocess.run(
        ["alembic", "upgrade", "head"],
        cwd=PROJECT_ROOT,
        capture_output=True,
        text=True,
        check=False
    )
    if result.returncode != 0:
        logger.warning(f"Migration output: {result.stderr}")
    else:
        logger.info("Database migrations completed")

def create_app(
    settings: Optional[Settings] = None,
    engine: Optional[Engine] = None,
    verifier: Optional[CredentialVerifier] = None,
) -> FastAPI:
    """Build the application. Every collaborator is created here once and
    handed to the components that need it."""
    settings = settings or get_settings()

    setup_logging(
        service_name=settings.SERVICE_NAME,
        level=settings.LOG_LEVEL,
        version=settings.SERVICE_VERSION,
        enable_file=bool(settings.LOG_FILE),
        log_file=settings.LOG_FILE,
    )

    engine = engine or create_engine_from_settings(settings)
    verifier = verifier or CredentialVerifier.from_file(
        settings.JWT_PUBLIC_KEY_FILE,
        algorithm=settings.JWT_ALG,
        leeway=settings.JWT_LEEWAY_SECONDS,
    )
    gateway = PersistenceGateway(
        make_session_factory(engine),
        service_version=settings.SERVICE_VERSION,
        start_time=time.time(),
    )
    dispatcher = AuthorizationDispatcher(verifier, gateway)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifecycle management"""
        logger.info(f"Starting {settings.SERVICE_NAME} version {settings.SERVICE_VERSION}")

        if settings.RUN_MIGRATIONS:
            try:
                run_migrations()
            except OSError as e:
                logger.error(f"Migration error: {e}")

        try:
            init_models(engine)
            logger.info("Database models initialized")
        except Exception as e:
            logger.error(f"Failed to initialize database models: {e}")
            raise

        logger.info(f"{settings.SERVICE_NAME} started successfully")

        yield

        logger.info(f"Shutting down {settings.SERVICE_NAME}")
        engine.dispose()

    app = FastAPI(
        title=settings.SERVICE_NAME,
        description=SERVICE_DESCRIPTION,
        version=settings.SERVICE_VERSION,
        lifespan=lifespan,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json"
    )
    app.state.dispatcher = dispatcher

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    health_service = ServiceHealth(settings.SERVICE_NAME, engine, settings.SERVICE_VERSION)
    app.include_router(health_service.create_health_router())

    app.include_router(inventory_router)
    app.include_router(rpc_router)

    @app.get("/")
    async def root():
        """Root endpoint"""
        return {
            "service": settings.SERVICE_NAME,
            "version": settings.SERVICE_VERSION,
            "status": "running",
            "docs": "/api/docs"
        }

    @app.get("/info")
    async def info():
        """Service information endpoint"""
        return {
            "service": settings.SERVICE_NAME,
            "version": settings.SERVICE_VERSION,
            "description": SERVICE_DESCRIPTION,
            "environment": os.getenv("ENVIRONMENT", "development"),
            "endpoints": {
                "health": "/health",
                "ready": "/health/ready",
                "live": "/health/live",
                "metrics": "/metrics",
                "rest": "/api",
                "rpc": "/rpc/{operation}",
                "docs": "/api/docs"
            }
        }

    return app

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("inventory_service.main:create_app", factory=True, host="0.0.0.0", port=8000)
