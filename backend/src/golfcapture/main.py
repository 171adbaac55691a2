"""
Golf Capture - Main FastAPI Application
"""

import asyncio
import logging
import time

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import settings
from .database import init_db
from .exceptions import GolfCaptureError
from .jobs.email_worker import start_email_scheduler
from .routes import (
    ab_test,
    analytics,
    auth,
    capture,
    customer,
    email,
    export,
    imports,
    location,
    pipeline,
    prospects,
    revenue,
    rewards,
    segment,
    tag,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO if settings.DEBUG else logging.WARNING,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="Golf course customer capture - QR rewards, prospect scoring, follow-up email and CRM",
    version="1.0.0",
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_email_worker_task = None


# Request logging middleware
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()

    response = await call_next(request)

    process_time = time.time() - start_time
    logger.info(
        f"{request.method} {request.url.path} - " f"Status: {response.status_code} - " f"Time: {process_time:.3f}s"
    )

    return response


# Domain errors raised by the service layer
@app.exception_handler(GolfCaptureError)
async def domain_exception_handler(request: Request, exc: GolfCaptureError):
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__}: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Global exception: {str(exc)}", exc_info=True)
    return JSONResponse(status_code=500, content={"detail": "Internal server error occurred"})


# Startup event
@app.on_event("startup")
async def startup_event():
    """Initialize database and background workers on startup"""
    global _email_worker_task
    logger.info("Starting Golf Capture API...")

    # Initialize database tables
    try:
        init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {str(e)}")
        raise

    if settings.EMAIL_WORKER_ENABLED:
        _email_worker_task = asyncio.create_task(start_email_scheduler())
        logger.info("Email worker started")

    logger.info(f"API started in {settings.ENVIRONMENT} mode")


# Shutdown event
@app.on_event("shutdown")
async def shutdown_event():
    """Stop the email worker"""
    global _email_worker_task
    logger.info("Shutting down Golf Capture API...")

    if _email_worker_task is not None:
        _email_worker_task.cancel()
        try:
            await _email_worker_task
        except asyncio.CancelledError:
            pass
        _email_worker_task = None


# Include routers
app.include_router(auth.router)
app.include_router(capture.router)
app.include_router(rewards.router)
app.include_router(customer.router)
app.include_router(prospects.router)
app.include_router(pipeline.router)
app.include_router(location.router)
app.include_router(tag.router)
app.include_router(segment.router)
app.include_router(email.router)
app.include_router(imports.router)
app.include_router(export.router)
app.include_router(ab_test.router)
app.include_router(revenue.router)
app.include_router(analytics.router)


# Root endpoint
@app.get("/")
async def root():
    """Root endpoint - API health check"""
    return {
        "name": settings.APP_NAME,
        "version": "1.0.0",
        "status": "running",
        "environment": settings.ENVIRONMENT,
        "docs": "/docs" if settings.DEBUG else "disabled",
    }


# Health check endpoint
@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring"""
    return {"status": "healthy", "timestamp": time.time()}


# API info endpoint
@app.get("/api/info")
async def api_info():
    """Get API information"""
    return {
        "app_name": settings.APP_NAME,
        "version": "1.0.0",
        "environment": settings.ENVIRONMENT,
        "features": {
            "qr_capture": True,
            "reward_redemption": True,
            "prospect_scoring": True,
            "membership_pipeline": True,
            "email_followups": settings.EMAIL_WORKER_ENABLED,
            "sms_alerts": settings.twilio_configured,
            "crm_import_export": True,
            "ab_testing": True,
            "revenue_attribution": True,
        },
        "endpoints": {
            "capture": "/capture",
            "rewards": "/rewards/{code}",
            "customers": "/customers",
            "prospects": "/prospects",
            "pipeline": "/pipeline",
            "segments": "/segments",
            "emails": "/emails",
            "imports": "/imports",
            "analytics": "/analytics",
        },
    }


if __name__ == "__main__":
    uvicorn.run(
        "golfcapture.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level="info" if settings.DEBUG else "warning",
    )
