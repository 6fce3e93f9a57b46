# safepsy_api/main.py
from contextlib import asynccontextmanager
from typing import Optional
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse

from safepsy_api import __version__
from safepsy_api.config import Settings, get_settings
from safepsy_api.database import DatabaseConnection, LeadRepository, ensure_lead_tables
from safepsy_api.errors import GENERIC_FAILURE_MESSAGE, LeadIntakeError, RateLimitError
from safepsy_api.leads.service import LeadIntakeService
from safepsy_api.middleware.cors import setup_cors
from safepsy_api.middleware.security import setup_security
from safepsy_api.utils.ip_hashing import IPHasher
from safepsy_api.utils.rate_limiting import RateLimiter

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings):
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def register_exception_handlers(app: FastAPI):
    @app.exception_handler(LeadIntakeError)
    async def lead_intake_error_handler(request: Request, exc: LeadIntakeError):
        headers = None
        if isinstance(exc, RateLimitError):
            headers = {"Retry-After": str(exc.retry_after)}
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "message": exc.message},
            headers=headers
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.info(f"Malformed request body on {request.url.path}")
        return JSONResponse(
            status_code=400,
            content={"success": False, "message": "Invalid request body"}
        )

    # Innermost middleware, so its 500 still gets the security and CORS headers
    @app.middleware("http")
    async def global_exception_handler(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            logger.error(f"Unhandled exception: {exc}", exc_info=True)
            return JSONResponse(
                status_code=500,
                content={"success": False, "message": GENERIC_FAILURE_MESSAGE}
            )


def create_app(settings: Optional[Settings] = None, repository=None) -> FastAPI:
    """Build the API. Passing ``repository`` skips the database pool entirely."""
    settings = settings or get_settings()
    configure_logging(settings)

    database = DatabaseConnection(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan events"""
        # Startup
        logger.info("Starting SafePsy API...")
        if settings.ip_hashing_enabled:
            logger.info("IP hashing enabled with secure salt")
        else:
            logger.info("IP hashing disabled (privacy by default)")

        if repository is None:
            try:
                await database.open()
                logger.info("Database connection pool initialized")
                if settings.auto_create_tables:
                    async with database.acquire() as connection:
                        await ensure_lead_tables(connection)
            except Exception as e:
                if settings.environment == "development":
                    logger.warning(f"Database connection failed (development mode): {e}")
                else:
                    logger.error(f"Failed to initialize database: {e}")
                    raise

        yield

        # Shutdown
        logger.info("Shutting down SafePsy API...")
        try:
            await database.close()
        except Exception as e:
            logger.warning(f"Error closing database connections: {e}")

    app = FastAPI(
        title="SafePsy API",
        description="Waitlist and contact lead intake",
        version=__version__,
        lifespan=lifespan
    )

    app.state.settings = settings
    app.state.database = database
    app.state.rate_limiter = RateLimiter(
        max_requests=settings.rate_limit_max_requests,
        window=settings.rate_limit_window_seconds
    )
    app.state.lead_service = LeadIntakeService(
        repository=repository if repository is not None else LeadRepository(database),
        ip_hasher=IPHasher.from_settings(settings)
    )

    # Middleware added later wraps earlier ones: CORS ends up outermost
    register_exception_handlers(app)
    setup_security(app, settings)
    setup_cors(app, settings)

    from safepsy_api.routes.contact import router as contact_router
    app.include_router(contact_router)

    from safepsy_api.routes.subscribe import router as subscribe_router
    app.include_router(subscribe_router)

    @app.get("/healthz", response_class=PlainTextResponse)
    async def liveness():
        return "ok"

    @app.get("/readyz", response_class=PlainTextResponse)
    async def readiness():
        return "ready"

    @app.get("/health")
    async def health_check():
        """Health check including database"""
        db_healthy = await database.ping() if database.is_open else False

        return {
            "status": "healthy" if db_healthy else "degraded",
            "environment": settings.environment,
            "database_healthy": db_healthy,
            "ip_hashing_enabled": settings.ip_hashing_enabled
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("safepsy_api.main:app", host="0.0.0.0", port=app.state.settings.port)
