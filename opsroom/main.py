"""FastAPI application entry point."""

import logging
import traceback
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import TimeoutError as SQLAlchemyTimeoutError

from .config import settings
from .database import create_all_tables, ping_database
from .routers import access_router, messages_router, notes_router, profiles_router, rooms_router
from .services.errors import (
    CodeSpaceExhaustedError,
    InvalidInputError,
    NotFoundError,
    OpsRoomError,
    UnauthorizedError,
)
from .services.room_lock_service import room_locks

# Configure logging to show errors
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup/shutdown tasks."""
    # Startup
    if settings.db_create_all:
        logger.info("Creating database tables...")
        await create_all_tables()

    if await ping_database():
        logger.info("Database reachable")
    else:
        logger.warning("Database not reachable at startup, requests will fail until it is")

    yield

    # Shutdown
    logger.info("Shutting down")


# Create FastAPI application
app = FastAPI(
    title="OpsRoom API",
    description="Code-protected chat rooms with private notes and operator roles",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Typed core failures -> HTTP status
_ERROR_STATUS = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    UnauthorizedError: status.HTTP_403_FORBIDDEN,
    InvalidInputError: 422,
    CodeSpaceExhaustedError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


@app.exception_handler(OpsRoomError)
async def opsroom_error_handler(request: Request, exc: OpsRoomError):
    """Translate a core failure into its HTTP status with the failure kind."""
    status_code = _ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
    logger.info(f"{request.method} {request.url.path} -> {status_code} ({exc.kind}): {exc.detail}")
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.detail, "error": exc.kind},
    )


# Database pool exhaustion handler - return 503 so clients can retry
@app.exception_handler(SQLAlchemyTimeoutError)
async def db_pool_exhausted_handler(request: Request, exc: SQLAlchemyTimeoutError):
    """Handle database connection pool exhaustion with 503 Service Unavailable."""
    logger.warning(
        f"Database pool exhausted on {request.method} {request.url}: {exc}"
    )
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "detail": "Service temporarily unavailable. Please retry.",
            "retry_after": 5,
        },
        headers={"Retry-After": "5"},
    )


# Global exception handler to log errors
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Log all unhandled exceptions with full traceback."""
    logger.error(f"Unhandled exception on {request.method} {request.url}:")
    logger.error(f"Exception type: {type(exc).__name__}")
    logger.error(f"Exception message: {str(exc)}")
    logger.error(f"Traceback:\n{traceback.format_exc()}")
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )

# Include API routers
app.include_router(profiles_router)
app.include_router(access_router)
app.include_router(rooms_router)
app.include_router(messages_router)
app.include_router(notes_router)


@app.get("/")
async def root():
    """Root endpoint - health check."""
    return {
        "status": "healthy",
        "service": "OpsRoom API",
        "version": "1.0.0",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    database_ok = await ping_database()
    return {
        "status": "healthy" if database_ok else "degraded",
        "database": "connected" if database_ok else "unreachable",
        "locks": {
            "active": room_locks.active_keys,
        },
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("opsroom.main:app", host=settings.host, port=settings.port)
