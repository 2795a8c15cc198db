import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

from flight_dispatch.core.config import Settings, settings as default_settings
from flight_dispatch.api.v1.api import api_router
from flight_dispatch.core.cache import init_redis, close_redis
from flight_dispatch.db.init_db import seed_defaults
from flight_dispatch.db.session import Storage
from flight_dispatch.services.clients.aviationstack import AviationStackClient
from flight_dispatch.services.flight_status import FlightStatusFetcher
from flight_dispatch.services.flight_status_refresher import FlightStatusRefresher
from flight_dispatch.services.scheduler import SchedulerService

# Configure logging
logging.basicConfig(
    level=default_settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

SHUTDOWN_GRACE_SECONDS = 30


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Handle application startup and shutdown events."""
        # Startup
        logger.info("Starting application...")

        storage = Storage.from_settings(settings)
        storage.initialize_schema()
        if settings.SEED_DEFAULT_DATA:
            with storage.session() as db:
                seed_defaults(db, settings)
        app.state.storage = storage

        # Initialize Redis if enabled
        app.state.redis = None
        if settings.ENABLE_REDIS:
            try:
                app.state.redis = await init_redis(settings.REDIS_URL, **settings.redis_config)
                logger.info("Redis connection established")
            except Exception as e:
                logger.error(f"Failed to initialize Redis: {str(e)}")
                logger.warning("Running without Redis - refresh lock is per process only")

        client = AviationStackClient(
            api_key=settings.AVIATIONSTACK_API_KEY,
            base_url=settings.AVIATIONSTACK_BASE_URL,
            timeout=settings.AVIATIONSTACK_TIMEOUT,
        )
        app.state.flight_fetcher = FlightStatusFetcher(client)
        app.state.refresher = FlightStatusRefresher(
            storage,
            app.state.flight_fetcher,
            request_delay=settings.FLIGHT_STATUS_REQUEST_DELAY_SECONDS,
            lookback_days=settings.FLIGHT_STATUS_LOOKBACK_DAYS,
            redis_client=app.state.redis,
            lock_ttl=settings.REFRESH_LOCK_TTL,
        )

        scheduler = None
        if settings.ENABLE_SCHEDULER:
            scheduler = SchedulerService(
                app.state.refresher,
                interval_minutes=settings.FLIGHT_STATUS_REFRESH_MINUTES,
                initial_delay_seconds=settings.FLIGHT_STATUS_INITIAL_DELAY_SECONDS,
            )
            scheduler.start()

        yield

        # Shutdown
        logger.info("Shutting down application...")

        if scheduler is not None:
            scheduler.shutdown()
        else:
            app.state.refresher.stop()
        if not await app.state.refresher.wait_until_idle(SHUTDOWN_GRACE_SECONDS):
            logger.warning("Flight status refresh still running at shutdown")

        # Close Redis connection
        if app.state.redis is not None:
            await close_redis(app.state.redis)
            logger.info("Redis connection closed")

        storage.dispose()

    # Create FastAPI app with lifespan events
    app = FastAPI(
        title=settings.PROJECT_NAME,
        debug=settings.DEBUG,
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        lifespan=lifespan
    )
    app.state.settings = settings

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {str(exc)}", exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )

    # Include API router
    app.include_router(api_router, prefix=settings.API_V1_STR)

    # Health check endpoint
    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "version": settings.PROJECT_VERSION,
            "environment": settings.ENVIRONMENT,
            "debug": settings.DEBUG
        }

    return app


app = create_app()
