# config.py
import logging
import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger("signaling.config")


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("⚠️ Invalid integer for %s=%r, using %d", name, raw, default)
        return default


PORT = _int_env("PORT", 3000)
HOST = os.getenv("HOST", "0.0.0.0")
SECRET_KEY = os.getenv("SECRET_KEY", "dev_secret_key")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# "*" or a comma separated list of origins
_origins = os.getenv("CORS_ALLOWED_ORIGINS", "*").strip()
CORS_ALLOWED_ORIGINS = "*" if _origins == "*" else [o.strip() for o in _origins.split(",") if o.strip()]

# Abuse bounds for caller supplied room ids and chat text
MAX_ROOM_ID_LENGTH = _int_env("MAX_ROOM_ID_LENGTH", 300)
MAX_MESSAGE_LENGTH = _int_env("MAX_MESSAGE_LENGTH", 2000)
