"""
FastAPI application entry point.

Configures the application with routes, middleware, and settings.
"""
import os
import traceback

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

# Initialize Sentry for error tracking (must be done early)
import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

from finstatements import __version__

sentry_dsn = os.getenv("SENTRY_DSN")
if sentry_dsn:
    sentry_sdk.init(
        dsn=sentry_dsn,
        environment=os.getenv("ENVIRONMENT", "development"),
        release=os.getenv("APP_VERSION", __version__),
        traces_sample_rate=float(os.getenv("SENTRY_TRACES_SAMPLE_RATE", "0.1")),
        integrations=[
            FastApiIntegration(transaction_style="endpoint"),
            SqlalchemyIntegration(),
            LoggingIntegration(level=None, event_level="ERROR"),
        ],
        send_default_pii=False,
    )

from finstatements.api.routes import monitoring, statements
from finstatements.config import get_settings
from finstatements.database import init_db
from finstatements.exceptions import FinStatementsError
from finstatements.logging_config import configure_logging
from finstatements.middleware.logging import CorrelationIdMiddleware, RequestLoggingMiddleware

configure_logging()

logger = structlog.get_logger(__name__)

settings = get_settings()

app = FastAPI(
    title="finstatements API",
    description="""
## Financial statements derived from a double-entry ledger

Generates the Trial Balance, Balance Sheet, Income Statement and Cash Flow
Statement for one company and fiscal period from posted journal entries.

Every statement carries a reconciliation block. An out-of-balance statement
is still returned; `reconciliation.balances` is false and `difference`
holds the signed gap.
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {"name": "Statements", "description": "Financial statement generation"},
        {"name": "Monitoring", "description": "Health checks"},
    ],
)

# Order matters: correlation ID first
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(CorrelationIdMiddleware)

app.include_router(statements.router, prefix="/api/v1", tags=["Statements"])
app.include_router(monitoring.router, tags=["Monitoring"])


# Global Exception Handlers

@app.exception_handler(FinStatementsError)
async def finstatements_exception_handler(request: Request, exc: FinStatementsError):
    """Handle all finstatements custom exceptions."""
    logger.error(
        "finstatements_error",
        error_code=exc.error_code,
        message=exc.message,
        details=exc.details,
        path=str(request.url.path),
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_dict())


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions with consistent format."""
    sentry_sdk.capture_exception(exc)

    logger.error(
        "unhandled_error",
        error_type=type(exc).__name__,
        message=str(exc),
        path=str(request.url.path),
        traceback=traceback.format_exc(),
    )
    return JSONResponse(
        status_code=500,
        content={
            "error": True,
            "error_code": "FS-999",
            "message": "An unexpected error occurred. Please try again.",
            "details": {"error_type": type(exc).__name__} if settings.debug else {},
        },
    )


@app.on_event("startup")
async def startup_event() -> None:
    """Initialize application on startup."""
    logger.info("Starting finstatements API", debug=settings.debug)

    if sentry_dsn:
        logger.info("Sentry error tracking enabled", environment=os.getenv("ENVIRONMENT", "development"))
    else:
        logger.warning("Sentry error tracking not configured (SENTRY_DSN not set)")

    init_db()

    logger.info("finstatements API started successfully")


@app.on_event("shutdown")
async def shutdown_event() -> None:
    """Cleanup on application shutdown."""
    logger.info("Shutting down finstatements API")
