from fastapi import FastAPI
from slowapi.errors import RateLimitExceeded
from contextlib import asynccontextmanager
from slowapi import _rate_limit_exceeded_handler
# Rate Limiter
from interview_core.core.route_limiters import limiter
# Routers
from interview_core.routes.health import router as health_router
from interview_core.routes.jobs import router as jobs_router
from interview_core.routes.interviews import router as interviews_router
from interview_core.routes.proctoring import router as proctoring_router
from interview_core.routes.skills import router as skills_router
from interview_core.routes.analytics import router as analytics_router
from interview_core.routes.feedback import router as feedback_router
# CORS Middleware
from interview_core.core.cors_middleware import add_cors_middleware
# Configuration
from interview_core.core import config
# Logger
from loguru import logger
# Database
from interview_core.database import create_tables
# Error Handling
from fastapi.exceptions import RequestValidationError
from fastapi import HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from starlette.status import HTTP_422_UNPROCESSABLE_ENTITY
from sqlalchemy.exc import IntegrityError

from interview_core.errors.exceptions import InterviewCoreError
from interview_core.errors.handlers import (
    database_integrity_handler,
    generic_exception_handler,
    http_exception_handler,
    interview_core_exception_handler,
)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan events."""
    # Startup
    try:
        create_tables()
        logger.info(f"Application startup completed successfully (env: {config.ENV})")
    except Exception as e:
        logger.error(f"Error during application startup: {e}")
        raise

    yield

    logger.info("Application shutdown")

# Initialize FastAPI app
app = FastAPI(
    title="Interview Assessment Core",
    description="Interview sessions, answer scoring, feedback reports and proctoring",
    version="0.1.0",
    lifespan=lifespan,
    # Interactive docs stay off in production
    docs_url=None if config.ENV == "production" else "/docs",
    redoc_url=None if config.ENV == "production" else "/redoc",
)
# Add CORS middleware
add_cors_middleware(app)

# Centralized error handlers
app.add_exception_handler(InterviewCoreError, interview_core_exception_handler)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)
app.add_exception_handler(IntegrityError, database_integrity_handler)

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=HTTP_422_UNPROCESSABLE_ENTITY,
        content={"error": "InvalidInput", "detail": jsonable_encoder(exc.errors()), "retryable": False},
    )

# Add rate limiter to the app
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Include routers
app.include_router(health_router)
app.include_router(jobs_router)
app.include_router(interviews_router)
app.include_router(proctoring_router)
app.include_router(skills_router)
app.include_router(analytics_router)
app.include_router(feedback_router)
