"""
FastAPI application for the shift schedule extraction service.

Provides endpoints for:
- Uploading a PDF shift schedule and extracting its shifts
- Reading and clearing the current schedule
"""

import logging

from contextlib import asynccontextmanager

from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Handle both package imports (when running as module) and standalone imports (uvicorn main:app)
try:
    from .config import get_settings
    from .models import HealthResponse
    from .routers import schedule
    from .services.ai import get_schedule_extractor
    from .services.exceptions import (
        ExtractionTimeoutError,
        InvalidInputError,
        ReadError,
        ScheduleExtractionError,
    )
except ImportError:
    import sys
    from pathlib import Path
    # Add parent directory to path for standalone imports
    backend_dir = Path(__file__).parent
    if str(backend_dir) not in sys.path:
        sys.path.insert(0, str(backend_dir))
    from config import get_settings
    from models import HealthResponse
    from routers import schedule
    from services.ai import get_schedule_extractor
    from services.exceptions import (
        ExtractionTimeoutError,
        InvalidInputError,
        ReadError,
        ScheduleExtractionError,
    )

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if get_settings().debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    logger.info("Starting Shift Schedule Extraction Service...")
    get_schedule_extractor()
    logger.info("Services initialized successfully")
    yield
    logger.info("Shutting down Shift Schedule Extraction Service...")


# Create FastAPI application
app = FastAPI(
    title="Shift Schedule Extraction API",
    description="Extract shift schedules from PDF documents using AI",
    version="1.0.0",
    lifespan=lifespan,
)

# Configure CORS for frontend development
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",  # Vite development server
        "http://127.0.0.1:5173",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Health Endpoints
# =============================================================================


@app.get("/", response_model=HealthResponse)
async def root() -> HealthResponse:
    """Root endpoint - health check."""
    return HealthResponse(status="healthy", message="Shift Schedule Extraction API is running")


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="healthy", message="Service is healthy")


# =============================================================================
# Include Routers
# =============================================================================

app.include_router(schedule.router)


# =============================================================================
# Exception Handlers
# =============================================================================


@app.exception_handler(InvalidInputError)
@app.exception_handler(ReadError)
async def invalid_input_error_handler(request, exc: ScheduleExtractionError):
    """Handle rejected or unreadable uploads."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": str(exc)},
    )


@app.exception_handler(ExtractionTimeoutError)
async def timeout_error_handler(request, exc: ExtractionTimeoutError):
    """Handle extraction service timeouts."""
    return JSONResponse(
        status_code=status.HTTP_504_GATEWAY_TIMEOUT,
        content={"detail": str(exc)},
    )


@app.exception_handler(ScheduleExtractionError)
async def schedule_extraction_error_handler(request, exc: ScheduleExtractionError):
    """Handle remaining extraction errors."""
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": str(exc)},
    )
