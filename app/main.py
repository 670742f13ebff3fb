from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError
import time
import logging

from .api.appointments import router as appointments_router
from .core.config import settings
from .core.database import SessionLocal, check_connection, engine, init_db
from .core.errors import AppointmentError
from .services.seed import seed_default_appointments

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.VERSION,
    description="REST backend for booking and managing clinic appointments",
    docs_url="/docs",
    redoc_url="/redoc"
)

# Middleware setup
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Custom middleware for request logging and timing
@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)

    # Log request
    logger.info(
        f"{request.method} {request.url.path} - "
        f"Status: {response.status_code} - "
        f"Time: {process_time:.4f}s"
    )

    return response

# Exception handlers
@app.exception_handler(AppointmentError)
async def appointment_error_handler(request: Request, exc: AppointmentError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.error, "message": exc.detail}
    )

@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "InvalidRequest",
            "message": "Invalid request parameters",
            "details": jsonable_encoder(exc.errors())
        }
    )

@app.exception_handler(404)
async def not_found_handler(request: Request, exc: HTTPException):
    # Status handlers take precedence over class handlers
    if isinstance(exc, AppointmentError):
        return await appointment_error_handler(request, exc)
    return JSONResponse(
        status_code=404,
        content={
            "error": "NotFound",
            "message": "The requested resource was not found",
            "path": str(request.url.path)
        }
    )

@app.exception_handler(500)
async def internal_error_handler(request: Request, exc: Exception):
    logger.error(f"Internal server error: {str(exc)}")
    return JSONResponse(
        status_code=500,
        content={
            "error": "InternalError",
            "message": "An unexpected error occurred"
        }
    )

# Include routers
app.include_router(appointments_router)

# Startup and shutdown events
@app.on_event("startup")
async def startup_event():
    """Check the database, then seed the default appointments."""
    logger.info(f"Starting {settings.APP_NAME}...")
    logger.info(f"Using {engine.dialect.name} database")

    # A failed connection is logged; the process keeps running
    try:
        check_connection()
    except SQLAlchemyError as e:
        logger.error(f"Database connection failed: {str(e)}")
        return
    logger.info("Connected to the database")

    if settings.AUTO_CREATE_TABLES:
        try:
            init_db()
            logger.info("Database tables created")
        except SQLAlchemyError as e:
            logger.error(f"Failed to create database tables: {str(e)}")
            return

    if settings.SEED_DEFAULTS:
        db = SessionLocal()
        try:
            inserted = seed_default_appointments(db)
        finally:
            db.close()
        logger.info(f"Seeded {inserted} default appointment(s)")

    logger.info("Application startup complete")

@app.on_event("shutdown")
async def shutdown_event():
    """Release pooled connections on shutdown."""
    logger.info(f"Shutting down {settings.APP_NAME}...")
    engine.dispose()

# Root endpoint
@app.get("/", response_class=PlainTextResponse)
async def root():
    return "Hello from the clinic appointment backend!"

# Health check endpoint
@app.get("/health")
def health_check():
    """Health check endpoint, including database reachability."""
    try:
        check_connection()
        database = "connected"
    except SQLAlchemyError as e:
        logger.warning(f"Health check could not reach the database: {str(e)}")
        database = "unavailable"

    return {
        "status": "healthy" if database == "connected" else "degraded",
        "database": database,
        "timestamp": time.time(),
        "version": settings.VERSION
    }

def run():
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )

if __name__ == "__main__":
    run()
