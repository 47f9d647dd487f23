# app/main.py

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError
import sys
import time
import psutil

# Core modules
from app.core.database import test_connection, init_db, AsyncSessionLocal
from app.core.config import settings
from app.core.exceptions import AppError
from app.core.rate_limiter import limiter
from app.core.seeding_logic import seed_admin_user

# Routers
from app.api.endpoints import (
    auth as auth_router,
    admin as admin_router,
    logs as logs_router,
    hod as hod_router,
    students as students_router,
    events as events_router,
    common as common_router,
)

# ------------------------------------------------------------
# LOGURU CONFIGURATION
# ------------------------------------------------------------
logger.remove()
logger.add(
    sys.stdout,
    format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
           "<level>{level}</level> | "
           "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
           "<level>{message}</level>",
    colorize=True,
    backtrace=True,
    diagnose=settings.ENV != "prod",
)

# ------------------------------------------------------------
# FASTAPI APP INIT
# ------------------------------------------------------------
app = FastAPI(
    title="Campus Events Backend",
    version="1.0.0",
    description="Event proposals, approvals and registrations for students, HODs and admins.",
)

START_TIME = time.time()
DB_STATUS = "Connecting..."

# ------------------------------------------------------------
# RATE LIMITING
# ------------------------------------------------------------
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


# ------------------------------------------------------------
# ERROR HANDLERS
# ------------------------------------------------------------
@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception(f"Database failure on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=503,
        content={"detail": "Service temporarily unavailable", "code": "DATABASE_ERROR"},
    )


# ------------------------------------------------------------
# METRICS API
# ------------------------------------------------------------
@app.get("/api/metrics", tags=["System"])
async def metrics():
    uptime_seconds = int(time.time() - START_TIME)
    cpu_usage = psutil.cpu_percent(interval=None)
    ram_usage = psutil.virtual_memory().percent
    try:
        disk_usage = psutil.disk_usage('/').percent
    except OSError:
        disk_usage = 0

    # Database health & latency
    db_start = time.time()
    db_latency = 0
    try:
        await test_connection()
        current_db_status = "Connected"
        db_latency = round((time.time() - db_start) * 1000, 2)
    except (SQLAlchemyError, OSError):
        logger.exception("Health check: database unreachable")
        current_db_status = "Error"

    return {
        "status": "Online",
        "version": app.version,
        "cpu": cpu_usage,
        "ram": ram_usage,
        "disk": disk_usage,
        "uptime": uptime_seconds,
        "database": current_db_status,
        "db_latency": db_latency,
    }


# ------------------------------------------------------------
# CORS CONFIGURATION
# ------------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type"],
)

# ------------------------------------------------------------
# REGISTER ROUTERS
# ------------------------------------------------------------
app.include_router(auth_router.router)
app.include_router(admin_router.router)
app.include_router(logs_router.router)
app.include_router(hod_router.router)
app.include_router(students_router.router)
app.include_router(events_router.router)
app.include_router(common_router.router)

# ------------------------------------------------------------
# APPLICATION STARTUP EVENTS
# ------------------------------------------------------------
@app.on_event("startup")
async def on_startup():
    global DB_STATUS
    logger.info("Starting Campus Events Backend...")

    # 1) Database connection test
    try:
        await test_connection()
        DB_STATUS = "Connected"
        logger.success("Database connection established.")
    except (SQLAlchemyError, OSError):
        DB_STATUS = "Error"
        logger.exception("Startup aborted: Database connection failed.")

    # 2) Initialize database tables
    if DB_STATUS == "Connected":
        try:
            await init_db()
            logger.success("Database tables ready.")
        except SQLAlchemyError as e:
            logger.warning(f"Table initialization encountered an issue: {e}")

    # 3) Seed Super Admin (Only if DB is connected)
    if DB_STATUS == "Connected":
        try:
            async with AsyncSessionLocal() as session:
                await seed_admin_user(session)
        except (SQLAlchemyError, AppError):
            logger.exception("Super Admin seeding failed.")

    logger.success("Backend startup completed.")


# ------------------------------------------------------------
# ROOT HEALTH CHECK
# ------------------------------------------------------------
@app.get("/", tags=["System"])
async def root():
    return {
        "status": "ok",
        "service": "Campus Events Backend",
        "version": app.version,
        "database": DB_STATUS,
    }
