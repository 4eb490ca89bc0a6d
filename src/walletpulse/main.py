"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from walletpulse.app_context import get_app_context
from walletpulse.config.settings import get_settings
from walletpulse.config.logging_config import setup_logging
from walletpulse.repositories.sqlalchemy.database import init_db
from walletpulse.api.routers import prices_router, pnl_router
from walletpulse.core.exceptions import AppError

_ERROR_STATUS = {
    "VALIDATION_ERROR": 400,
    "UPSTREAM_UNAVAILABLE": 502,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    setup_logging()
    init_db()
    context = get_app_context()
    await context.start()
    app.state.context = context
    yield
    # Shutdown
    await context.close()


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Token price cache and per-token PnL for monitored wallets",
    version=settings.app_version,
    lifespan=lifespan,
)

# Include routers
app.include_router(prices_router)
app.include_router(pnl_router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    return JSONResponse(
        status_code=_ERROR_STATUS.get(exc.code, 400),
        content={"error": exc.code, "message": exc.message},
    )


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {
        "app": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }
