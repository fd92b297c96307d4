"""
Realty Admin FastAPI Backend
Main application entry point

JSON API over the same table operations the dashboard uses.

Run with:
    uvicorn backend.main:app --reload
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from config import AppConfig
from backend.routers import admin, health

logging.basicConfig(level=AppConfig.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title=AppConfig.APP_NAME, version=AppConfig.VERSION)

# CORS Configuration - Allow all origins for now
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,  # Must be False when using wildcard
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup_event():
    """Report configuration problems once at boot."""
    valid, errors = AppConfig.validate_config()
    if valid:
        logger.info(f"✅ {AppConfig.APP_NAME} API ready")
    else:
        for error in errors:
            logger.warning(f"Configuration: {error}")


app.include_router(admin.router, prefix="/api")
app.include_router(health.router, prefix="/api")


@app.get("/")
async def root():
    return {"name": AppConfig.APP_NAME, "version": AppConfig.VERSION, "docs": "/docs"}
