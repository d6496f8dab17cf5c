# expenses_api/main.py
import uvicorn
import os
import logging
import uuid
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from expenses_api.api.api import api_router
from expenses_api.core.config import Settings, get_settings
from expenses_api.core.database import build_engine, build_sessionmaker, create_db_and_tables
from expenses_api.core.security import PasswordHasher, TokenIssuer, TokenValidator

logger = logging.getLogger(__name__)

INTERNAL_ERROR_DETAIL = "An error occurred while processing your request. Please try again later."


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Field-level messages for malformed or missing input, answered as 400."""
    errors = {}
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(location) or "request"
        errors.setdefault(field, []).append(error.get("msg", "Invalid value"))

    logger.warning(f"Invalid request to {request.url.path}: {errors}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "title": "One or more validation errors occurred.",
            "status": status.HTTP_400_BAD_REQUEST,
            "errors": errors,
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    """Opaque 500; the correlation id ties the response to the server log entry."""
    correlation_id = uuid.uuid4().hex
    logger.exception(f"Unhandled exception [{correlation_id}] on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "title": "Internal Server Error",
            "status": status.HTTP_500_INTERNAL_SERVER_ERROR,
            "detail": INTERNAL_ERROR_DETAIL,
            "instance": correlation_id,
        },
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL)

    engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.AUTO_CREATE_TABLES:
            # Alembic owns the schema in production; this is for local runs
            await create_db_and_tables(engine)
            logger.info("✅ Database tables created successfully")
        logger.info(f"✅ {settings.APP_NAME} started ({settings.ENVIRONMENT})")
        yield
        await engine.dispose()

    docs_enabled = not settings.is_production
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.VERSION,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_tags=[
            {"name": "Account", "description": "Registration, login and profile"},
            {"name": "Transactions", "description": "The caller's income and expenses"},
        ],
        lifespan=lifespan,
    )

    app.state.sessionmaker = build_sessionmaker(engine)
    app.state.password_hasher = PasswordHasher(rounds=settings.PASSWORD_HASH_ROUNDS)
    app.state.token_issuer = TokenIssuer.from_settings(settings)
    app.state.token_validator = TokenValidator.from_settings(settings)

    # CORS Configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_CORS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(api_router, prefix="/api")

    @app.get("/", tags=["Root"])
    async def root():
        """Root endpoint with API information"""
        return {
            "message": f"{settings.APP_NAME} is running!",
            "version": settings.VERSION,
        }

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "version": settings.VERSION,
            "environment": settings.ENVIRONMENT,
        }

    return app


app = create_app()

if __name__ == "__main__":
    port = int(os.environ.get("PORT", 8000))
    uvicorn.run("expenses_api.main:app", host="0.0.0.0", port=port, reload=False)
