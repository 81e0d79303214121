import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv

# Load environment-specific .env file BEFORE any app imports
env = os.getenv("ENV", "local")
dotenv_file = f".env.{env}"
load_dotenv(dotenv_file)

from fastapi import FastAPI, Depends, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from codepoet.db import create_tables, get_db
from codepoet.exceptions import CodePoetError
from codepoet.middleware import PerformanceMiddleware
from codepoet.utils import (
    logger,
    configure_sentry,
    is_debug,
    is_deployed,
    API_PREFIX,
)
from codepoet.utils.response_utils import codepoet_error_response, internal_error
from codepoet.utils.sentry_utils import capture_exception
from codepoet.routers import (
    generate_router,
    usage_router,
    poems_router,
    styles_router,
    sync_router,
    account_router,
    github_router,
)
from codepoet.services.firebase import initialize_firebase, is_firebase_initialized
from codepoet.services.gemini import gemini_service

# Initialize Sentry for error tracking (only in non-debug environments)
sentry_enabled = configure_sentry()
if sentry_enabled:
    logger.info("Sentry error tracking initialized")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    logger.info("Ensuring local store tables exist...")
    await create_tables()

    try:
        initialize_firebase()
    except FileNotFoundError:
        logger.warning("Starting without Firebase: authentication and cloud sync are disabled")

    if not gemini_service.is_configured():
        logger.warning("GEMINI_API_KEY is not set; poem generation will fail")

    yield

    logger.info("Shutting down CodePoet backend")


app = FastAPI(
    title="CodePoet Backend",
    description="Turns source code into poetry, with tiered usage quotas and cloud sync",
    version="0.1.0",
    docs_url=None if is_deployed() else "/docs",
    redoc_url=None,
    lifespan=lifespan,
)

# CORS configuration - allow all origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Performance monitoring middleware
app.add_middleware(PerformanceMiddleware)

# Register routers
app.include_router(generate_router, prefix=API_PREFIX)
app.include_router(usage_router, prefix=API_PREFIX)
app.include_router(poems_router, prefix=API_PREFIX)
app.include_router(styles_router, prefix=API_PREFIX)
app.include_router(sync_router, prefix=API_PREFIX)
app.include_router(account_router, prefix=API_PREFIX)
app.include_router(github_router, prefix=API_PREFIX)


@app.exception_handler(CodePoetError)
async def codepoet_exception_handler(request: Request, exc: CodePoetError):
    """Render domain errors with their code, status and retry hint."""
    if exc.status_code >= 500:
        logger.warning(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")
    return codepoet_error_response(exc)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for unhandled errors."""
    logger.error(
        f"Unhandled exception: {exc.__class__.__name__}: {exc}",
        exc_info=True,
    )

    capture_exception(exc)

    return internal_error()


@app.get("/")
async def root():
    return {"message": "Welcome to CodePoet Backend API", "version": "0.1.0"}


@app.get("/health")
async def health_check(db: AsyncSession = Depends(get_db)):
    """Health check endpoint."""
    try:
        await db.execute(text("SELECT 1"))
        db_status = "connected"
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        db_status = "disconnected"

    return {
        "status": "healthy",
        "database": db_status,
        "firebase": "initialized" if is_firebase_initialized() else "unavailable",
        "gemini": "configured" if gemini_service.is_configured() else "unconfigured",
    }


if __name__ == "__main__":
    import uvicorn

    logger.info(f"Starting CodePoet Backend (env={env}, debug={is_debug()})")
    # Account locks live in this process; more workers would not share them
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=is_debug(), workers=1)
