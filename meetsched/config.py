"""Configuration loading from environment variables and defaults."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(_PROJECT_ROOT / ".env")


def _env(key: str, default: str = "") -> str:
    return os.environ.get(key, default)


# Paths
CREDENTIALS_DIR = _PROJECT_ROOT / "credentials"
CLIENT_SECRET_PATH = CREDENTIALS_DIR / "client_secret.json"


def token_path_for_account(email: str) -> Path:
    """Return the token file path for a specific account."""
    safe = email.replace("@", "_at_").replace(".", "_")
    return CREDENTIALS_DIR / f"token_{safe}.json"


# Google API scopes
GOOGLE_SCOPES = [
    "https://www.googleapis.com/auth/contacts.readonly",
    "https://www.googleapis.com/auth/userinfo.email",
]

# Account selection
ACCOUNT_TYPE = _env("MEETSCHED_ACCOUNT_TYPE", "com.google")
DEFAULT_ACCOUNT = _env("MEETSCHED_DEFAULT_ACCOUNT") or None

# Rate limiting (requests per second)
PEOPLE_RATE_LIMIT = float(_env("MEETSCHED_PEOPLE_RATE_LIMIT", "5"))

# Database
DB_PATH = Path(_env("MEETSCHED_DB_PATH", "") or str(_PROJECT_ROOT / "data" / "meetsched.db"))

# Logging
LOG_LEVEL = _env("MEETSCHED_LOG_LEVEL", "INFO").upper()
