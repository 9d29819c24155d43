import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from tortoise.contrib.fastapi import tortoise_exception_handlers

from .core.config import DATABASE_URL
from .core.database import DataStore
from .core.errors import ReportError, report_error_handler
from .core.logging_config import configure_logging
from .features.trends.router import router as trends_router

configure_logging()
logger = logging.getLogger("busana.main")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Owns the reporting DataStore: connects it on startup, exposes it to the
    routes through app.state, and closes it on shutdown.
    """
    logger.info("Starting Busana reports API...")
    store = DataStore(DATABASE_URL)
    await store.connect()
    app.state.store = store

    yield

    await store.close()
    logger.info("Busana reports API stopped.")


app = FastAPI(
    title="Busana Reports API",
    description="Month-over-month KPI trends for the fashion store dashboard.",
    version="0.1.0",
    exception_handlers={
        **tortoise_exception_handlers(),
        ReportError: report_error_handler,
    },
    lifespan=lifespan,
)


@app.get("/")
async def read_root(request: Request):
    client_host = request.client.host if request.client else "unknown client"
    logger.info(f"Root endpoint '/' accessed by {client_host}")
    return {"message": "Welcome to the Busana Reports API!"}


app.include_router(trends_router, prefix="/api")
# Dashboard alias, kept out of the OpenAPI schema to avoid duplicate operation ids.
app.include_router(trends_router, prefix="/api/dashboard", include_in_schema=False)
