import logging
from concurrent.futures import ThreadPoolExecutor
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Import models to ensure they're registered with SQLAlchemy Base
from . import models  # noqa: F401
from .config import (
    CORS_ORIGINS,
    NOTIFICATION_TIMEOUT_SECONDS,
    NOTIFICATION_WEBHOOK_URL,
    NOTIFICATION_WORKERS,
)
from .database import Base, engine
from .domain.meetings.router import router as meetings_router
from .domain.participants.router import router as participants_router
from .domain.scheduling.router import router as scheduling_router
from .exceptions import MeetyError
from .services.notification_service import build_dispatcher

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Reduce verbosity of third-party libraries
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)

notification_executor = ThreadPoolExecutor(
    max_workers=NOTIFICATION_WORKERS, thread_name_prefix="meety-notify"
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    try:
        Base.metadata.create_all(bind=engine, checkfirst=True)
        logger.info("Database tables created successfully")
    except Exception as e:
        # Ignore "already exists" errors from race conditions between workers
        error_msg = str(e)
        if "already exists" in error_msg or "duplicate key" in error_msg:
            logger.info("Database tables already exist (created by another worker)")
        else:
            logger.error(f"Failed to create database tables: {e}")
            raise

    yield

    logger.info("Application shutting down...")
    notification_executor.shutdown(wait=True)


app = FastAPI(title="Meety API", version="1.0.0", lifespan=lifespan)

# Booking events go to the log and, when configured, to a webhook
app.state.dispatcher = build_dispatcher(
    webhook_url=NOTIFICATION_WEBHOOK_URL,
    timeout=NOTIFICATION_TIMEOUT_SECONDS,
    executor=notification_executor,
)


@app.exception_handler(MeetyError)
async def meety_exception_handler(request: Request, exc: MeetyError):
    """Map domain errors to 400 / 404 / 409 responses"""
    logger.warning(f"⚠️ {request.method} {request.url.path} - {exc.status_code}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={**exc.details, "detail": exc.message},
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Convert 422 validation errors from HTTPBearer to 401 authentication errors
    when the issue is with the Authorization header
    """
    for error in exc.errors():
        if error.get("loc") and "authorization" in str(error.get("loc")).lower():
            logger.warning(
                f"Authentication failed for {request.url.path}: Missing or invalid Authorization header"
            )
            return JSONResponse(
                status_code=401,
                content={
                    "detail": "Not authenticated. Please provide a valid Bearer token in the Authorization header."
                },
            )

    logger.warning(f"Validation error for {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=422, content={"detail": jsonable_errors(exc)})


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    # pydantic puts the raised ValueError in ctx, which is not JSON serialisable
    errors = []
    for error in exc.errors():
        error = dict(error)
        if "ctx" in error:
            error["ctx"] = {key: str(value) for key, value in error["ctx"].items()}
        errors.append(error)
    return errors


@app.middleware("http")
async def log_requests(request: Request, call_next):
    try:
        response = await call_next(request)
        return response
    except Exception as e:
        logger.error(f"{request.method} {request.url.path} - Error: {str(e)}")
        raise


# CORS Configuration
logger.info(f"CORS allowed origins: {CORS_ORIGINS}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
)

# Routes
app.include_router(meetings_router)
app.include_router(scheduling_router)
app.include_router(participants_router)


@app.get("/health")
def health_check():
    return {"status": "healthy"}
