import logging
import os
from contextlib import asynccontextmanager
from http import HTTPStatus

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.api.routers import accounts, auth, catalog, commerce, orders
from storefront.db.session import Database
from storefront.errors import ErrorKind, ServiceError
from storefront.logging_config import setup_logging
from storefront.services.mail import mailer_from_settings
from storefront.services.media import MediaUrlRewriter
from storefront.services.shipping import GhnClient
from storefront.services.storage import S3Storage
from storefront.settings import Settings

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    ErrorKind.BAD_REQUEST: 400,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.NOT_FOUND: 404,
}

openapi_tags = [
    {"name": "Health", "description": "Service and dependency health checks."},
]


def error_body(status_code: int, message) -> dict:
    return {"statusCode": status_code, "message": message, "error": HTTPStatus(status_code).phrase}


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    status_code = STATUS_BY_KIND.get(exc.kind, 400)
    if status_code >= 500:
        logger.error("Unhandled service error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status_code, content=error_body(status_code, exc.message))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())[1:])
        messages.append(f"{location}: {error.get('msg')}" if location else error.get("msg"))
    return JSONResponse(status_code=400, content=error_body(400, messages))


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.status_code, exc.detail),
        headers=getattr(exc, "headers", None),
    )


# PUBLIC_INTERFACE
def create_app(settings: Settings = None, storage=None, carrier=None, mailer=None) -> FastAPI:
    """
    Build the FastAPI application.

    Collaborators default to the real clients built from `settings`; tests pass
    in-memory replacements.
    """
    settings = settings or Settings.from_env()
    setup_logging(settings.log_level)

    database = Database(settings.database_url, echo=settings.sql_echo, engine_options=settings.engine_options)
    storage = storage or S3Storage.from_settings(settings)
    carrier = carrier or GhnClient.from_settings(settings)
    mailer = mailer or mailer_from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database.open()
        if settings.auto_create_schema:
            database.create_all()
            logger.info("Database schema ensured")
        try:
            yield
        finally:
            database.close()
            close = getattr(carrier, "close", None)
            if close is not None:
                close()

    app = FastAPI(
        title="E-Commerce Backend API",
        description="Backend service for the e-commerce platform (catalog, cart, orders, payments, shipping).",
        version="0.2.0",
        openapi_tags=openapi_tags,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.db = database
    app.state.storage = storage
    app.state.media = MediaUrlRewriter(storage.build_public_url)
    app.state.carrier = carrier
    app.state.mailer = mailer

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)

    @app.get("/", tags=["Health"], summary="Service health check")
    def health_check():
        """Basic health check for the backend service (no external dependencies)."""
        return {"message": "Healthy"}

    @app.get("/health/db", tags=["Health"], summary="Database health check")
    def health_db_check():
        """
        Check database connectivity.

        Returns a JSON payload indicating whether the database is reachable.
        """
        ok = database.healthcheck()
        return {"database": "ok" if ok else "unreachable", "ok": ok}

    for module in (auth, accounts, catalog, orders, commerce):
        for router in module.ROUTERS:
            app.include_router(router)

    logger.info("Application created with %d routes", len(app.routes))
    return app


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    uvicorn.run(
        "storefront.api.main:create_app",
        factory=True,
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
    )
