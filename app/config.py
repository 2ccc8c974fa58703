from pathlib import Path
import os

from dotenv import load_dotenv

# Load environment variables from the working directory and the repo root (if present).
REPO_ROOT = Path(__file__).resolve().parents[1]
load_dotenv()
load_dotenv(REPO_ROOT / ".env")

APP_NAME = os.getenv("APP_NAME", "Task Management API")
APP_VERSION = os.getenv("APP_VERSION", "1.0.0")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))
RELOAD = os.getenv("RELOAD", "false").lower() in ("1", "true", "yes")

_cors_origins = os.getenv("CORS_ORIGINS", "http://localhost:3000")
CORS_ORIGINS = [origin.strip() for origin in _cors_origins.split(",") if origin.strip()]
