"""Main FastAPI application entry point"""

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
import logging

from estate_pulse.api.errors import request_validation_handler, unhandled_exception_handler
from estate_pulse.api.health import VERSION, router as health_router
from estate_pulse.api.meetings import router as meetings_router
from estate_pulse.api.photos import router as photos_router
from estate_pulse.api.projects import router as projects_router
from estate_pulse.api.reports import router as reports_router
from estate_pulse.api.units import router as units_router
from estate_pulse.config import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

app = FastAPI(
    title="Estate Pulse API",
    description="Backend API for tracking real-estate projects, units, photos and meetings",
    version=VERSION,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
    expose_headers=["Content-Disposition"],
    max_age=3600,
)

# Error responses
app.add_exception_handler(RequestValidationError, request_validation_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

# Include routers
app.include_router(health_router)
app.include_router(projects_router)
app.include_router(units_router)
app.include_router(photos_router)
app.include_router(meetings_router)
app.include_router(reports_router)


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "Estate Pulse API",
        "version": VERSION,
        "status": "running",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
