"""Google OAuth 2.0 flow with per-account token persistence."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow

from . import config
from .contacts_client import get_user_email

log = logging.getLogger(__name__)


def _require_client_secret() -> None:
    if not config.CLIENT_SECRET_PATH.exists():
        raise FileNotFoundError(
            f"OAuth client secret not found at {config.CLIENT_SECRET_PATH}. "
            "Download it from Google Cloud Console → Credentials → "
            "OAuth 2.0 Client IDs → Download JSON, then save it as "
            f"{config.CLIENT_SECRET_PATH}"
        )


def _run_flow() -> Credentials:
    _require_client_secret()
    flow = InstalledAppFlow.from_client_secrets_file(
        str(config.CLIENT_SECRET_PATH), config.GOOGLE_SCOPES
    )
    return flow.run_local_server(port=0)


def _save_token(creds: Credentials, token_path: Path) -> None:
    config.CREDENTIALS_DIR.mkdir(parents=True, exist_ok=True)
    token_path.write_text(creds.to_json())
    log.info("Token saved to %s", token_path)


def get_credentials_for_account(token_path: Path) -> Credentials:
    """Return valid Google OAuth credentials for an account's token file.

    Handles the load/refresh/re-authorize cycle and persists the token.
    """
    creds: Credentials | None = None

    if token_path.exists():
        try:
            creds = Credentials.from_authorized_user_file(
                str(token_path), config.GOOGLE_SCOPES
            )
        except (json.JSONDecodeError, ValueError) as exc:
            log.warning("Saved token is invalid, re-authenticating: %s", exc)
            creds = None

    if creds and creds.expired and creds.refresh_token:
        try:
            creds.refresh(Request())
        except Exception:
            log.warning("Token refresh failed, re-authenticating")
            creds = None

    if not creds or not creds.valid:
        creds = _run_flow()
        _save_token(creds, token_path)

    return creds


def add_account_interactive() -> tuple[Credentials, str, Path]:
    """Run the OAuth flow for a new account.

    Always forces a new authorization (ignores existing tokens).
    Returns (credentials, email, token_path).
    """
    creds = _run_flow()
    email = get_user_email(creds)
    token_path = config.token_path_for_account(email)
    _save_token(creds, token_path)
    return creds, email, token_path
