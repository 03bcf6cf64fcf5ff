from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.orm import Session
import os
import logging
from contextlib import asynccontextmanager

from . import __version__
from .config import CORS_ORIGINS
from .database import get_db, check_database_connection, create_tables
from .roster import roster_router

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Check the database and create tables before serving requests."""
    logger.info("Starting up Cold Call API...")
    if os.getenv("PYTEST_CURRENT_TEST") is not None:
        logger.info("Skipping DB startup during tests")
    else:
        if not check_database_connection():
            logger.error("Database connection failed")
            raise RuntimeError("Cannot connect to database")
        create_tables()
    yield
    logger.info("Shutting down Cold Call API...")

app = FastAPI(
    title="Cold Call API",
    description="Fair random student picker for classrooms",
    version=__version__,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(roster_router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": "Cold Call API", "version": __version__}


@app.get("/health")
async def health_check(db: Session = Depends(get_db)):
    """Health check endpoint with database connectivity test."""
    try:
        db.execute(text("SELECT 1"))
        return {
            "status": "healthy",
            "database": "connected",
            "version": __version__
        }
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        return {
            "status": "unhealthy",
            "database": "disconnected",
            "error": str(e),
            "version": __version__
        }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
