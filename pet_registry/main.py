"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator
import logging
import time

from fastapi import FastAPI, Request, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from pet_registry.config import Settings
from pet_registry.database import engine
from pet_registry.routers import auth, pets
from pet_registry.services.pet_service import PetNotFoundError, PetValidationError


# Create settings instance for the application
settings = Settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log all requests and responses."""

    async def dispatch(self, request: Request, call_next):
        """Log request and response details."""
        request_id = id(request)

        start_time = time.time()
        logger.info(
            f"Request started: {request.method} {request.url.path}",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "client": request.client.host if request.client else None
            }
        )

        try:
            response = await call_next(request)

            duration = time.time() - start_time
            logger.info(
                f"Request completed: {request.method} {request.url.path} {response.status_code}",
                extra={
                    "request_id": request_id,
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": response.status_code,
                    "duration_ms": round(duration * 1000, 2)
                }
            )

            return response

        except Exception as exc:
            duration = time.time() - start_time
            logger.error(
                f"Request failed: {request.method} {request.url.path}",
                exc_info=True,
                extra={
                    "request_id": request_id,
                    "method": request.method,
                    "path": request.url.path,
                    "duration_ms": round(duration * 1000, 2),
                    "error_type": type(exc).__name__,
                    "error_message": str(exc)
                }
            )

            # Re-raise to let exception handlers deal with it
            raise


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager for startup and shutdown events."""
    logger.info(f"Application started: {settings.app_name} (debug={settings.debug})")

    yield

    await engine.dispose()
    logger.info(f"Application shutdown: {settings.app_name}")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="""
    Pet Registry API

    Every authenticated user keeps a registry of their pets:

    * **Pets**: list, create, read, update and soft delete the caller's pets
    * **NFT lookup**: resolve any pet, whoever owns it, from its NFT identifier
    * **Authentication**: registration and JWT login

    ## Authentication

    All pet endpoints require a JWT bearer token:

    1. Register a new user at `/v1/auth/register`
    2. Login at `/v1/auth/jwt/login` to receive a JWT token
    3. Include the token in the `Authorization` header as `Bearer <token>`

    ## Error Handling

    All errors return JSON responses with:
    - `detail`: Human-readable error message
    - `error_code`: Machine-readable error code

    Field validation failures (`VALIDATION_ERROR`) also carry `messages`, a
    list of `{path, message}` entries, one per invalid field.
    """,
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "auth",
            "description": "Authentication operations: registration, login and logout.",
        },
        {
            "name": "users",
            "description": "Current user profile.",
        },
        {
            "name": "pets",
            "description": "Pet registry operations for the authenticated user.",
        },
    ],
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_allowed_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add logging middleware
app.add_middleware(LoggingMiddleware)


@app.get("/")
async def root() -> dict:
    """Root endpoint returning API information."""
    return {
        "name": settings.app_name,
        "version": "0.1.0",
        "status": "operational",
        "docs": "/docs"
    }


# Include routers
app.include_router(auth.router, prefix="/v1/auth")
app.include_router(pets.router)


@app.get("/health")
async def health_check() -> dict:
    """Health check endpoint."""
    return {
        "status": "healthy",
        "app_name": settings.app_name
    }


# Global exception handlers

@app.exception_handler(PetNotFoundError)
async def pet_not_found_handler(request: Request, exc: PetNotFoundError) -> JSONResponse:
    """Handle pets that do not resolve for the caller."""
    logger.info(f"Pet not found: {request.url.path}")
    return JSONResponse(
        status_code=404,
        content={
            "detail": "Pet not found",
            "error_code": "NOT_FOUND"
        }
    )


@app.exception_handler(PetValidationError)
async def pet_validation_handler(request: Request, exc: PetValidationError) -> JSONResponse:
    """Report every invalid field of a pet body at once."""
    logger.info(f"Pet validation failed: {request.url.path} - {exc}")
    return JSONResponse(
        status_code=422,
        content={
            "detail": "Validation failed",
            "error_code": "VALIDATION_ERROR",
            "messages": [error.model_dump() for error in exc.errors]
        }
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle HTTP exceptions including authentication errors."""
    if exc.status_code >= 500:
        logger.error(f"HTTP error {exc.status_code}: {request.url.path} - {exc.detail}")
    elif exc.status_code in (401, 429):
        logger.warning(f"HTTP {exc.status_code}: {request.url.path}")
    else:
        logger.info(f"HTTP {exc.status_code}: {request.url.path}")

    # Map status codes to error codes
    error_code_map = {
        404: "NOT_FOUND",
        403: "FORBIDDEN",
        401: "UNAUTHORIZED",
        422: "VALIDATION_ERROR",
        429: "TOO_MANY_REQUESTS",
        400: "BAD_REQUEST",
    }

    error_code = error_code_map.get(exc.status_code, f"HTTP_{exc.status_code}")

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "detail": exc.detail,
            "error_code": error_code
        },
        headers=getattr(exc, "headers", None)
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all unhandled exceptions, storage errors included."""
    logger.error(
        f"Unhandled exception: {request.url.path}",
        exc_info=True,
        extra={
            "method": request.method,
            "url": str(request.url),
            "client": request.client.host if request.client else None
        }
    )

    if settings.debug:
        # In debug mode, return detailed error information
        return JSONResponse(
            status_code=500,
            content={
                "detail": "Internal server error",
                "error_code": "INTERNAL_ERROR",
                "error_type": type(exc).__name__,
                "error_message": str(exc)
            }
        )
    else:
        return JSONResponse(
            status_code=500,
            content={
                "detail": "Internal server error",
                "error_code": "INTERNAL_ERROR"
            }
        )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "pet_registry.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
