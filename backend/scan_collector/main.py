"""
Scan Data Collector - Backend API
=================================
FastAPI application for the One Piece IoT scanner.

ARCHITECTURE:
    A sensor device posts distance readings (ultrasonic + LiDAR) tagged with
    an island and a character. They're stored in a relational database.
    A voice skill and a small REST API read, save, update and delete them.

    [Sensor Device] --POST /addReading--> [This Backend] ---> [MySQL / SQLite]
                                                ^
    [Voice Platform] ----POST /alexa------------+

VOICE COMMANDS:
    1. "What's my latest scan?"            - reads back the latest reading
    2. "Save a scan for Luffy on East Blue" - saves a new reading
    3. "Change my scan to Zoro on Wano"     - re-tags the latest reading
    4. "Delete my scan"                     - deletes the latest reading

HOW TO RUN:
    # Install
    pip install -e .          # add [mysql] for MySQL

    # Copy environment config
    cp env.example.txt .env
    # Edit .env with your settings

    # Run the server
    uvicorn scan_collector.main:app --reload --port 10000
    # or
    python -m scan_collector.main

API DOCUMENTATION:
    After starting the server, visit:
    - Swagger UI: http://localhost:10000/docs
    - ReDoc: http://localhost:10000/redoc

Author: Scan Data Collector Team
"""

import logging
import os
import sys
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from dotenv import load_dotenv
from sqlalchemy.exc import SQLAlchemyError

from scan_collector.routers import (
    readings_router,
    voice_router,
    set_reading_store,
    set_command_dispatcher,
)
from scan_collector.services import (
    CommandDispatcher,
    DEFAULT_REFERENCE_TABLE,
    FixedReferenceSource,
    NameResolver,
    ReadingStore,
    StorageError,
    StoreReferenceSource,
)


# Load environment variables from .env file
load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format='[%(asctime)s] %(message)s',
    datefmt='%H:%M:%S',
    handlers=[logging.StreamHandler(sys.stderr)]
)
logger = logging.getLogger(__name__)


# =============================================================================
# CONFIGURATION
# =============================================================================

def _database_url() -> str:
    """DATABASE_URL wins; otherwise build a MySQL URL from DB_*; otherwise local SQLite."""
    url = os.getenv("DATABASE_URL")
    if url:
        return url
    host = os.getenv("DB_HOST")
    if host:
        user = os.getenv("DB_USER", "")
        password = os.getenv("DB_PASS", "")
        name = os.getenv("DB_NAME", "")
        return f"mysql+pymysql://{user}:{password}@{host}/{name}"
    return "sqlite:///scans.db"


class Config:
    """
    Application configuration loaded from environment variables.

    Environment Variables:
        DATABASE_URL: SQLAlchemy URL (or DB_HOST/DB_USER/DB_PASS/DB_NAME for MySQL)
        DB_POOL_SIZE: Pooled connections (default: 5)
        DB_TIMEOUT: Seconds each database call may take (default: 5)
        REFERENCE_SOURCE: "database" or "fixed" island/character list
        SEED_REFERENCE_DATA: Fill empty islands/characters tables at startup
        FRONTEND_URL: URL of the frontend for CORS
        PORT: Port when run with `python -m scan_collector.main`
    """

    DATABASE_URL = _database_url()

    DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "5"))

    DB_TIMEOUT = float(os.getenv("DB_TIMEOUT", "5"))

    # "database" = reload per request, "fixed" = DEFAULT_REFERENCE_TABLE
    REFERENCE_SOURCE = os.getenv("REFERENCE_SOURCE", "database").lower()

    SEED_REFERENCE_DATA = os.getenv("SEED_REFERENCE_DATA", "true").lower() in ("1", "true", "yes")

    FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:5173")

    PORT = int(os.getenv("PORT", "10000"))

    # Allowed CORS origins
    CORS_ORIGINS = [
        FRONTEND_URL,
        "http://localhost:5173",    # Vite dev server
        "http://localhost:3000",    # Create React App
        "http://127.0.0.1:5173",
        "http://127.0.0.1:3000",
    ]


# =============================================================================
# APPLICATION LIFESPAN
# =============================================================================

def build_reference_source(store: ReadingStore):
    """Pick where island/character names come from, per REFERENCE_SOURCE."""
    if Config.REFERENCE_SOURCE == "fixed":
        return FixedReferenceSource(DEFAULT_REFERENCE_TABLE)
    if Config.REFERENCE_SOURCE != "database":
        logger.warning(
            f"Unknown REFERENCE_SOURCE '{Config.REFERENCE_SOURCE}', using 'database' "
            f"(expected 'database' or 'fixed')"
        )
    return StoreReferenceSource(store)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    STARTUP:
        1. Connect to the database, create missing tables
        2. Seed islands/characters if the tables are empty
        3. Build the resolver + dispatcher
        4. Inject store and dispatcher into routers

    SHUTDOWN:
        1. Close pooled database connections
    """
    # ========== STARTUP ==========
    print("=" * 60)
    print("🚀 SCAN DATA COLLECTOR - Starting Backend")
    print("=" * 60)

    store = ReadingStore(
        database_url=Config.DATABASE_URL,
        timeout=Config.DB_TIMEOUT,
        pool_size=Config.DB_POOL_SIZE,
    )

    try:
        store.create_tables()
        if Config.SEED_REFERENCE_DATA:
            await store.seed_reference_data(
                DEFAULT_REFERENCE_TABLE.islands,
                DEFAULT_REFERENCE_TABLE.characters,
            )
    except (StorageError, SQLAlchemyError) as e:
        # Keep serving; every request will report the database problem
        logger.error(f"Database setup failed: {e}")

    dispatcher = CommandDispatcher(store, NameResolver(build_reference_source(store)))

    set_reading_store(store)
    set_command_dispatcher(dispatcher)

    print(f"✅ Services initialized")
    print(f"   Database: {store.engine.url.render_as_string(hide_password=True)}")
    print(f"   DB timeout: {Config.DB_TIMEOUT} seconds")
    print(f"   Reference data: {Config.REFERENCE_SOURCE}")
    print(f"   CORS origins: {len(Config.CORS_ORIGINS)} configured")
    print()
    print("📖 API Documentation: /docs")
    print("=" * 60)

    yield  # Application runs here

    # ========== SHUTDOWN ==========
    print()
    print("🛑 Shutting down...")
    store.close()
    print("✅ Shutdown complete")


# =============================================================================
# CREATE FASTAPI APPLICATION
# =============================================================================

app = FastAPI(
    title="One Piece IoT API",
    description="""
## Overview

Backend for the island scanner: a sensor device saves distance readings,
a voice skill and this REST API read and manage them.

## Endpoints

| Method | Path | What it does |
|--------|------|--------------|
| POST | /addReading | Save a reading |
| GET | /readings | All readings, newest first |
| GET | /latestReading | Latest reading |
| PUT | /updateReading/{id} | Re-tag a reading |
| DELETE | /deleteReading/{id} | Delete a reading |
| GET | /islands | Islands |
| GET | /characters | Characters |
| POST | /alexa | Voice skill endpoint |
    """,
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)


# =============================================================================
# CORS MIDDLEWARE
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=Config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# ERROR HANDLERS
# =============================================================================

@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Bad input is a 400 with a readable message, and nothing reaches the database."""
    problems = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        problems.append(f"{field}: {error.get('msg')}" if field else error.get("msg"))
    return JSONResponse(
        status_code=400,
        content={"detail": "Invalid input - " + "; ".join(problems)},
    )


# =============================================================================
# INCLUDE ROUTERS
# =============================================================================

# REST endpoints
app.include_router(readings_router)

# Voice skill endpoint
app.include_router(voice_router)


# =============================================================================
# ROOT ENDPOINTS
# =============================================================================

@app.get("/", response_class=PlainTextResponse, summary="Health Check")
async def root():
    """Health check - the device and the voice platform ping this."""
    return "One Piece IoT API is running ✅"


@app.get("/health", summary="Health Check")
async def health():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "reference_source": Config.REFERENCE_SOURCE,
        "db_timeout": Config.DB_TIMEOUT,
    }


# If running directly, start the server (use uvicorn)
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=Config.PORT)
