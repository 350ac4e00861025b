from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

import structlog
from dotenv import load_dotenv

# Load .env file before importing app modules
load_dotenv(override=True)

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError, OperationalError
from starlette.exceptions import HTTPException

from app.api.router import api_router
from app.config import settings
from app.database import Database
from app.exceptions import ClassroomException, classify_integrity_error
from app.utils.logger import configure_logger

logger = structlog.get_logger()


def _format_validation_errors(errors: list[dict[str, Any]]) -> list[dict[str, Any]]:
    formatted_errors = []
    for error in errors:
        field_path = " -> ".join(str(loc) for loc in error["loc"])
        formatted_errors.append(
            {
                "field": field_path,
                "message": error["msg"],
                "type": error["type"],
            }
        )
    return formatted_errors


def _validation_response(errors: list[dict[str, Any]]) -> JSONResponse:
    formatted_errors = _format_validation_errors(errors)
    first = formatted_errors[0] if formatted_errors else None
    message = (
        f"{first['field']}: {first['message']}" if first else "Input validation failed"
    )
    return JSONResponse(
        status_code=400,
        content={
            "error": message,
            "details": {"validationErrors": formatted_errors},
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ClassroomException)
    async def classroom_exception_handler(
        request: Request, exc: ClassroomException
    ) -> JSONResponse:
        """Handle custom Classroom application exceptions."""
        log = logger.error if exc.status_code >= 500 else logger.info
        log(
            "Classroom application error",
            error_code=exc.error_code,
            message=exc.message,
            status_code=exc.status_code,
            details=exc.details,
            path=request.url.path,
            method=request.method,
        )

        response_content: Dict[str, Any] = {"error": exc.message}

        # Only validation errors carry details, and never in production
        if exc.details and exc.status_code == 400 and not settings.is_production:
            response_content["details"] = exc.details

        return JSONResponse(status_code=exc.status_code, content=response_content)

    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Handle request parsing errors (path, query and body)."""
        logger.info(
            "Request validation error",
            errors=_format_validation_errors(list(exc.errors())),
            path=request.url.path,
            method=request.method,
        )
        return _validation_response(list(exc.errors()))

    @app.exception_handler(PydanticValidationError)
    async def pydantic_validation_exception_handler(
        request: Request, exc: PydanticValidationError
    ) -> JSONResponse:
        """Handle Pydantic validation errors raised inside handlers."""
        logger.info(
            "Validation error",
            errors=_format_validation_errors(exc.errors()),
            path=request.url.path,
            method=request.method,
        )
        return _validation_response(exc.errors())

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(
        request: Request, exc: IntegrityError
    ) -> JSONResponse:
        """Handle database integrity errors that escaped the repositories."""
        logger.error(
            "Database integrity error",
            error=str(exc.orig) if exc.orig else str(exc),
            path=request.url.path,
            method=request.method,
        )

        kind = classify_integrity_error(exc)
        if kind == "unique":
            status_code, message = 409, "A record with this information already exists"
        elif kind == "foreign_key":
            status_code, message = 409, "Record is referenced by other records"
        elif kind == "not_null":
            status_code, message = 400, "Required field is missing"
        else:
            status_code, message = 400, "Data integrity error"

        return JSONResponse(status_code=status_code, content={"error": message})

    @app.exception_handler(OperationalError)
    async def operational_error_handler(
        request: Request, exc: OperationalError
    ) -> JSONResponse:
        """Handle database operational errors (connection issues, etc.)."""
        logger.error(
            "Database operational error",
            error=str(exc.orig) if exc.orig else str(exc),
            path=request.url.path,
            method=request.method,
        )

        return JSONResponse(
            status_code=500,
            content={"error": "Database is temporarily unavailable"},
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(
        request: Request, exc: HTTPException
    ) -> JSONResponse:
        """Handle FastAPI HTTPExceptions, e.g. unknown routes."""
        logger.info(
            "HTTP error",
            status_code=exc.status_code,
            detail=exc.detail,
            path=request.url.path,
            method=request.method,
        )

        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Global exception handler for all unhandled exceptions."""
        logger.exception(
            "Unhandled exception",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
            method=request.method,
        )

        return JSONResponse(
            status_code=500,
            content={"error": "An unexpected error occurred"},
        )


def create_app(database: Optional[Database] = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        database: Persistence context to use. When omitted one is built from
            settings at startup. Either way it is disposed at shutdown.
    """
    configure_logger(settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifespan context manager for FastAPI application."""
        logger.info("Starting up FastAPI application", environment=settings.ENVIRONMENT)
        app.state.database = database or Database.from_settings(settings)
        if settings.DB_CREATE_TABLES:
            await app.state.database.create_tables()
        try:
            yield
        finally:
            await app.state.database.dispose()
            logger.info("Shutting down FastAPI application")

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Classroom management API: departments, subjects, classes, "
        "enrollments and users",
        version="1.0.0",
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
        lifespan=lifespan,
    )

    register_exception_handlers(app)
    app.include_router(api_router, prefix=settings.API_PREFIX)
    return app


app = create_app()
