"""
FastAPI application for the Council Portal API.

Provides RESTful endpoints for council members, questions, site content,
user administration and data migration.

Responsibility: Main API application setup and configuration
"""

# Load .env BEFORE importing settings (critical for pydantic-settings)
from dotenv import load_dotenv
load_dotenv('.env', override=True)

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging

from council_portal.config import settings
from council_portal.db.session import db
from council_portal.exceptions import (
    AuthenticationRequiredError,
    NotFoundError,
    PermissionDeniedError,
    PortalError,
    ValidationError,
)
from api.middleware import SessionAuthMiddleware

# Configure logging
logging.basicConfig(
    level=settings.app.log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize the database on startup and close it on shutdown"""
    logger.info(f"Starting {settings.app.app_name}...")
    logger.info(f"Environment: {settings.app.environment}")
    logger.info(f"Debug mode: {settings.app.debug}")
    if not db.is_initialized:
        await db.initialize()
    await db.create_tables()
    yield
    logger.info(f"Shutting down {settings.app.app_name}...")
    await db.close()


# Create FastAPI app
app = FastAPI(
    title="Council Portal API",
    description="RESTful API for city council questions, answers and portal content",
    version=settings.app.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

logger.info(f"CORS Origins configured: {settings.app.cors_origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.app.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*", "Authorization"],
    max_age=3600,  # Cache preflight for 1 hour
)

app.add_middleware(SessionAuthMiddleware)


@app.get("/")
async def root():
    """Root endpoint - API information."""
    return {
        "name": "Council Portal API",
        "version": settings.app.app_version,
        "status": "operational",
        "endpoints": {
            "auth": "/api/v1/auth",
            "admin": "/api/v1/admin",
            "migration": "/api/v1/migration",
            "council_members": "/api/v1/council-members",
            "questions": "/api/v1/questions",
            "likes": "/api/v1/likes",
            "news": "/api/v1/news",
            "slideshow": "/api/v1/slideshow",
            "faq": "/api/v1/faq",
            "contact": "/api/v1/contact",
            "demographics": "/api/v1/demographics",
            "images": "/api/v1/images",
            "docs": "/docs"
        }
    }


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {
        "status": "healthy",
        "service": "council-portal-api"
    }


# Exception handlers

_STATUS_BY_ERROR = (
    (AuthenticationRequiredError, status.HTTP_401_UNAUTHORIZED),
    (PermissionDeniedError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
)


@app.exception_handler(PortalError)
async def portal_exception_handler(request: Request, exc: PortalError):
    """Map domain errors to HTTP status codes."""
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            break
    else:
        status_code = status.HTTP_400_BAD_REQUEST

    if status_code in (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN):
        logger.warning(f"{request.method} {request.url.path} refused: {exc.message}")
    return JSONResponse(status_code=status_code, content={"detail": exc.message})


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Global exception handler."""
    logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "detail": str(exc) if settings.app.debug else "An unexpected error occurred"
        }
    )


# Import and include routers
from api.v1.endpoints import (
    admin,
    auth,
    contact,
    council_members,
    demographics,
    faq,
    images,
    likes,
    migration,
    news,
    questions,
    sample_data,
    slideshow,
)

for endpoint_module in (
    auth,
    admin,
    migration,
    council_members,
    questions,
    likes,
    news,
    slideshow,
    faq,
    contact,
    demographics,
    images,
    sample_data,
):
    app.include_router(endpoint_module.router, prefix="/api/v1")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "api.main:app",
        host=settings.app.api_host,
        port=settings.app.api_port,
        reload=settings.app.debug
    )
