"""FastAPI application factory."""

import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI

from config import load_config
from core.generator import FloatingTimeGenerator
from core.health import HealthChecker, check_event_loop, create_generator_check
from internal.logging import LogLevel, StructuredLogger, get_logger
from service.auth import StatsAuth
from service.routes import health, ids
from utils.crash import create_async_handler


def create_app(config=None, generator=None):
    """Create and configure the FastAPI application.

    Generator configuration errors surface here, before the app exists.
    """
    config = config or load_config()

    StructuredLogger.configure(min_level=LogLevel[config.logging.level.upper()])
    logger_instance = get_logger("service")

    generator = generator or FloatingTimeGenerator.from_config(config.generator)
    health_checker = HealthChecker()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger_instance.info("Application starting", version="1.0.0", generator=repr(generator))
        loop = asyncio.get_running_loop()
        loop.set_exception_handler(create_async_handler(logger_instance))

        remaining = generator.remaining_ms()
        if remaining < config.generator.expiry_warning_ms:
            logger_instance.warn("Time field close to overflow", remaining_ms=remaining)

        yield

        logger_instance.info("Application shutdown complete")

    health_checker.register("event_loop", check_event_loop, critical=True)
    health_checker.register(
        "generator", create_generator_check(generator, config.generator.expiry_warning_ms), critical=True
    )

    app = FastAPI(
        title="floatid",
        version="1.0.0",
        description="floating-time 64-bit ID service",
        lifespan=lifespan,
    )

    ids.init(generator, config.service.max_batch, health_checker, StatsAuth.from_config(config.service))
    health.init(health_checker)

    app.include_router(ids.router)
    app.include_router(health.router)

    return app
