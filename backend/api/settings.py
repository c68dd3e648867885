"""
Runtime Settings

Values are read from the environment once at import time. A `.env` file
next to `main.py` (or the file named by ENV_FILE) is loaded first and never
overrides variables already set in the process.
"""

import os
from pathlib import Path

from dotenv import load_dotenv


BACKEND_DIR = Path(__file__).resolve().parent.parent

_ENV_FILE = (
    Path(os.getenv("ENV_FILE")).resolve()
    if os.getenv("ENV_FILE")
    else BACKEND_DIR / ".env"
)
load_dotenv(dotenv_path=_ENV_FILE, override=False)


def env_bool(name: str, default: bool = False) -> bool:
    """Read a boolean flag ("1", "true", "yes", "on")."""
    v = os.getenv(name)
    if v is None:
        return default
    return str(v).strip().lower() in ("1", "true", "yes", "y", "on")


def env_list(name: str, default_list):
    """Read a comma or newline separated list."""
    v = os.getenv(name)
    if not v:
        return list(default_list)
    parts = [p.strip() for p in v.replace("\n", ",").split(",") if p.strip()]
    return parts or list(default_list)


class Settings:
    # ── App / Runtime ─────────────────────────────────────
    ENV: str = os.getenv("ENV", "development")
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", 8000))
    DEBUG_MODE: bool = env_bool("DEBUG_MODE", False)
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    CORS_ORIGINS = env_list(
        "CORS_ORIGINS",
        [
            "http://localhost:3000",      # Next.js dev server
            "http://localhost:5173",      # Vite dev server
            "http://127.0.0.1:3000",
            "http://127.0.0.1:5173",
        ],
    )

    # ── Engine ────────────────────────────────────────────
    SMOOTHING_ALPHA: float = float(os.getenv("SMOOTHING_ALPHA", "0.5"))
    FOLLOW_THROUGH_TARGET_FRAMES: int = int(os.getenv("FOLLOW_THROUGH_TARGET_FRAMES", 15))

    # ── Coaching cues ─────────────────────────────────────
    CUE_LOCALE: str = os.getenv("CUE_LOCALE", "en")
    # Minimum gap between two cues sent on the same connection
    CUE_COOLDOWN_MS: int = int(os.getenv("CUE_COOLDOWN_MS", 5000))


settings = Settings()
