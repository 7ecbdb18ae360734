
import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parents[1] / ".env")


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    API_BASE_URL = os.getenv("API_BASE_URL", "https://localhost:7112/api")
    API_TIMEOUT = float(os.getenv("API_TIMEOUT", "10"))
    API_VERIFY_TLS = _env_bool("API_VERIFY_TLS", "true")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    WORKFLOW_SESSIONS = int(os.getenv("WORKFLOW_SESSIONS", "256"))
