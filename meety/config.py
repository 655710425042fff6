import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./meety.db")

# Security - CRITICAL: No default secret key in production
SECRET_KEY = os.getenv("SECRET_KEY")
if not SECRET_KEY:
    import warnings

    warnings.warn(
        "SECRET_KEY not set! Using insecure default - DO NOT USE IN PRODUCTION", RuntimeWarning, stacklevel=2
    )
    SECRET_KEY = "INSECURE-DEV-KEY-CHANGE-IN-PRODUCTION"  # noqa: S105 - Dev fallback only
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")

# Frontend base URL for shareable booking links
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:3000")

# Comma separated list of allowed CORS origins
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", FRONTEND_URL).split(",")
    if origin.strip()
]

# Host-local wall clock. Leave unset to use the server's local time.
HOST_TIMEZONE = os.getenv("HOST_TIMEZONE")

# Meeting duration bounds (minutes)
MIN_MEETING_DURATION = int(os.getenv("MIN_MEETING_DURATION", "5"))
MAX_MEETING_DURATION = int(os.getenv("MAX_MEETING_DURATION", "480"))

# How far ahead the public calendar may ask for available dates
MAX_AVAILABLE_DATES_RANGE = int(os.getenv("MAX_AVAILABLE_DATES_RANGE", "62"))

# Booking event webhook (optional) - events are POSTed as JSON, fire-and-forget
NOTIFICATION_WEBHOOK_URL = os.getenv("NOTIFICATION_WEBHOOK_URL")
NOTIFICATION_TIMEOUT_SECONDS = float(os.getenv("NOTIFICATION_TIMEOUT_SECONDS", "5"))
NOTIFICATION_WORKERS = int(os.getenv("NOTIFICATION_WORKERS", "2"))
