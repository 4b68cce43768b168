from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shortlink_app.config import settings
from shortlink_app.logging_config import configure_logging
from shortlink_app.api.v1 import urls, analytics, redirect

configure_logging(settings.log_level)

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="A URL shortener with click analytics built with FastAPI",
    debug=settings.debug
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.get("/")
def read_root():
    """Root endpoint with API information"""
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc"
    }


@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "environment": settings.environment,
        "storage_backend": settings.storage_backend
    }




######## Include routers (redirect last: it matches any single path segment)
app.include_router(urls.router, prefix="/api/v1")
app.include_router(analytics.router, prefix="/api/v1")
app.include_router(redirect.router)
