from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import SQLModel
from .error import ClientError, ServerError
from src.adapter.services.asyncio_cron_scheduler import AsyncioCronScheduler
import logging

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def handle_server_error(request: Request, exc: ServerError):
    logger.error(f"Server error: {exc.base_error.code} ({exc.base_error.reason})")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def create_lifespan(ApplicationConfig):
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        from src.app.use_cases.scheduled_notifications import initialize_jobs
        from src.depends import engine, new_unit_of_work

        async with engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
        logger.info("Database initialized")

        if ApplicationConfig.CRON_ENABLED:
            initialize_jobs(
                app.state.cron,
                new_unit_of_work,
                timezone=ApplicationConfig.CRON_TIMEZONE,
                retention_days=ApplicationConfig.SCHEDULED_NOTIFICATION_RETENTION_DAYS,
            )
            logger.info("Cron jobs started")

        yield

        app.state.cron.cancel_all()
        await engine.dispose()
        logger.info("Shutdown complete")

    return lifespan


def create_app(ApplicationConfig) -> FastAPI:
    app = FastAPI(title="Backoffice API", version="0.1.0", lifespan=create_lifespan(ApplicationConfig))
    app.state.config = ApplicationConfig
    app.state.cron = AsyncioCronScheduler()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from src.api.routes import audit, entities, health_check, notifications, scheduled_notifications

    prefix = ApplicationConfig.API_PREFIX
    app.include_router(health_check.router, tags=["Health"])
    app.include_router(audit.router, prefix=prefix, tags=["Audit"])
    app.include_router(scheduled_notifications.router, prefix=prefix, tags=["Scheduled Notifications"])
    app.include_router(notifications.router, prefix=prefix, tags=["Notifications"])
    app.include_router(entities.router, prefix=prefix, tags=["Entities"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)

    return app
