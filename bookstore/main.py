import logging
from fastapi import FastAPI, Depends, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from bookstore import __version__
from bookstore.core.config import Settings, settings
from bookstore.core.database import (
    create_engine_from_settings,
    create_session_factory,
    create_tables,
    get_db,
    ping,
)
from bookstore.api.v1.router import api_router
from bookstore.services.seed_service import seed_books
import bookstore.models  # noqa: F401  registers tables on Base.metadata

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Build the application. The engine and its pool live for the app's lifespan."""
    app_settings = app_settings or settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        logger.info("Starting up Bookstore API...")
        logger.info(f"Environment: {app_settings.ENVIRONMENT}")

        engine = create_engine_from_settings(app_settings)
        app.state.engine = engine
        app.state.session_factory = create_session_factory(engine)

        if app_settings.CREATE_TABLES:
            await create_tables(engine)
            logger.info("Database tables created successfully")

        if app_settings.SEED_DATABASE:
            logger.warning("SEED_DATABASE is enabled: replacing all books with sample data")
            async with app.state.session_factory() as db:
                await seed_books(db)

        logger.info("Bookstore API startup complete")

        yield

        # Shutdown
        logger.info("Shutting down Bookstore API...")
        await engine.dispose()

    app = FastAPI(
        title="Bookstore API",
        description="Catalog API for listing, searching and managing books",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if not app_settings.is_production else None,
        redoc_url="/redoc" if not app_settings.is_production else None,
    )

    # Configure CORS (always enabled)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.CORS_ORIGINS,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Include API routes
    app.include_router(api_router, prefix="/api/v1")

    @app.get("/")
    async def root():
        return {
            "message": "Bookstore API",
            "version": __version__,
            "status": "running",
            "environment": app_settings.ENVIRONMENT
        }

    @app.get("/health")
    async def health_check(db: AsyncSession = Depends(get_db)):
        try:
            await ping(db)
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Health check failed: {e}")
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"status": "unhealthy", "detail": str(e)}
            )
        return {"status": "healthy"}

    return app


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies and parameters are client errors (400), not 422."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())}
    )


app = create_app()
