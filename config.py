from __future__ import annotations

import os
from pathlib import Path

_BASE = Path(__file__).resolve().parent


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


TOPIC = os.getenv("QUIZ_TOPIC", "python")

# Attempt cap per batch is count * RETRY_MULTIPLIER
RETRY_MULTIPLIER = max(1, _int_env("QUIZ_RETRY_MULTIPLIER", 20))

DEFAULT_COUNT = _int_env("QUIZ_DEFAULT_COUNT", 25)
ALL_COUNT = _int_env("QUIZ_ALL_COUNT", 50)
MAX_COUNT = _int_env("QUIZ_MAX_COUNT", 200)

DATA_DIR = Path(os.getenv("QUIZ_DATA_DIR") or _BASE / "data" / "questions")

LOG_LEVEL = os.getenv("QUIZ_LOG_LEVEL", "INFO").upper()

CORS_ORIGINS = [
    o.strip()
    for o in os.getenv(
        "QUIZ_CORS_ORIGINS",
        "http://localhost:3000,http://127.0.0.1:3000,http://localhost:8080",
    ).split(",")
    if o.strip()
]


def admin_token() -> str:
    # Read per call so tests can monkeypatch the environment
    return os.getenv("ADMIN_TOKEN") or ""
