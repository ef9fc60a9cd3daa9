# api/index.py - Application entrypoint (also used by the Vercel deployment)

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
import logging
import sys
import os

# Add parent directory to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import Base, engine, SessionLocal, IS_PRODUCTION, SEED_SAMPLE_DATA
import tables.bookings, tables.ratings, tables.promos, tables.admin_notifications, tables.admin_sessions
from routes import bookings, ratings, promos, notifications, admin
from models.bookings import ServiceResponse
from services.catalog import list_services
from services.exceptions import GroomingError
from utils.seed import seed_sample_data

logger = logging.getLogger(__name__)

VERSION = "1.0.0"

# Create tables
Base.metadata.create_all(bind=engine)

if SEED_SAMPLE_DATA:
    db = SessionLocal()
    try:
        seed_sample_data(db)
    finally:
        db.close()

app = FastAPI(
    title="Cat Grooming Booking API",
    version=VERSION,
    description="Home-visit cat grooming bookings, ratings and moderation",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

# Add CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, specify your frontend domains
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(GroomingError)
async def grooming_error_handler(request: Request, exc: GroomingError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.message, "error_type": exc.error_type}
    )


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"Database error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={"success": False, "error": "Internal server error", "error_type": "infrastructure_error"}
    )


app.include_router(bookings.router)
app.include_router(ratings.router)
app.include_router(promos.router)
app.include_router(notifications.router)
app.include_router(admin.router)


@app.get("/", tags=["Root"])
def read_root():
    """
    Welcome endpoint that provides basic API information
    """
    return {
        "message": "Cat Grooming Booking API",
        "version": VERSION,
        "status": "running",
        "production": IS_PRODUCTION,
        "documentation": {
            "swagger_ui": "/docs",
            "redoc": "/redoc",
            "openapi_schema": "/openapi.json"
        }
    }


@app.get("/services", tags=["Root"])
def get_services():
    """Grooming service catalog with prices"""
    return {"success": True, "services": [ServiceResponse(**s) for s in list_services()]}


@app.get("/health", tags=["Health"])
def health():
    """
    Health check endpoint
    """
    return {
        "status": "healthy",
        "production": IS_PRODUCTION,
        "version": VERSION
    }
