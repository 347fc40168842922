"""
Invoice dashboard backend.

ARCHITECTURE:
- FastAPI routes translate the dashboard's query/page parameters and form
  posts into query-layer calls
- Query layer (services/) runs parameterized SQL through an injected,
  pooled async database handle
- PostgreSQL is the source of truth; SQLite is used for tests

Invoice amounts are stored in cents and converted at the edges only.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from invoicedesk.api.routes import auth, customers, dashboard, invoices
from invoicedesk.core.config import settings
from invoicedesk.core.exceptions import DataAccessError, NotFoundError, ValidationError
from invoicedesk.db.init_db import init_db
from invoicedesk.db.session import Database

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Startup: create tables (and placeholder data if enabled).
    Shutdown: close every pooled connection.
    """
    database: Database = app.state.database
    logger.info("Initializing database...")
    await init_db(database, seed=settings.SEED_PLACEHOLDER_DATA)
    logger.info("Database initialized")

    yield

    await database.dispose()
    logger.info("Database connections closed")


def create_app(database: Optional[Database] = None) -> FastAPI:
    app = FastAPI(
        title="InvoiceDesk API",
        description="Invoices, customers and dashboard aggregates.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.database = database or Database.from_settings(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "Origin"],
        max_age=600,
    )

    @app.middleware("http")
    async def add_security_headers(request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        logger.info("Not found: %s %s", exc.resource, exc.key)
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": "Resource not found"})

    @app.exception_handler(ValidationError)
    async def validation_handler(request: Request, exc: ValidationError):
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": {"message": "Missing or invalid fields.", "errors": exc.field_errors}},
        )

    @app.exception_handler(DataAccessError)
    async def data_access_handler(request: Request, exc: DataAccessError):
        # Already logged with the store error by the query layer
        logger.error("Request failed in %s", exc.operation)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": exc.message},
        )

    app.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
    app.include_router(invoices.router, prefix="/invoices", tags=["invoices"])
    app.include_router(customers.router, prefix="/customers", tags=["customers"])
    app.include_router(auth.router, prefix="/auth", tags=["auth"])

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


configure_logging()
app = create_app()
