"""
# src/flight_stats/auth/google_auth.py
# Google OAuth2 credentials for read-only Gmail access

The token cache is a pickle next to the OAuth client file. Any failure to
obtain working credentials is a MailboxError: without them the mailbox
cannot be read and the run cannot continue.
"""

import pickle
from pathlib import Path
from typing import List, Optional, Sequence

from google.auth.exceptions import GoogleAuthError, RefreshError, TransportError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from oauthlib.oauth2.rfc6749.errors import OAuth2Error

from ..errors import MailboxError
from ..utils.logger import get_logger

logger = get_logger(__name__)

GMAIL_READONLY_SCOPE = 'https://www.googleapis.com/auth/gmail.readonly'
DEFAULT_SCOPES = [GMAIL_READONLY_SCOPE]


def read_cached_token(token_file: Path) -> Optional[Credentials]:
    """
    Credentials from the pickle cache, None when there is no cache yet.

    Raises:
        MailboxError: when the cache exists but cannot be unpickled
    """
    if not token_file.exists():
        return None
    try:
        with token_file.open('rb') as f:
            return pickle.load(f)
    except (OSError, EOFError, pickle.UnpicklingError, AttributeError, ImportError) as e:
        raise MailboxError(
            f"Token cache {token_file} is unreadable ({type(e).__name__}: {e}). "
            "Delete it to authorize again."
        ) from e


def refresh_token(creds: Credentials, token_file: Path) -> Optional[Credentials]:
    """
    Refresh expired credentials in place.

    A revoked or expired refresh token drops the cache and returns None so
    the caller can run the consent flow again.

    Raises:
        MailboxError: when the token endpoint cannot be reached
    """
    try:
        creds.refresh(Request())
    except RefreshError as e:
        logger.warning(f"Token refresh rejected ({e}). Re-authorization required.")
        token_file.unlink(missing_ok=True)
        return None
    except TransportError as e:
        raise MailboxError(f"Cannot reach Google to refresh the token: {e}") from e
    return creds


def authorize(credentials_file: Path, scopes: List[str]) -> Credentials:
    """
    Run the browser consent flow for the OAuth client in credentials_file.

    Raises:
        MailboxError: when the client file is missing or malformed, or the
            flow is denied
    """
    if not credentials_file.exists():
        raise MailboxError(
            f"OAuth client file not found at {credentials_file}. "
            "Download it from the Google Cloud console."
        )
    logger.info("Authorizing with Google API...")
    try:
        flow = InstalledAppFlow.from_client_secrets_file(str(credentials_file), scopes)
        return flow.run_local_server(port=0)
    except (ValueError, OSError, OAuth2Error, GoogleAuthError) as e:
        raise MailboxError(f"Google authorization failed: {e}") from e


def save_token(creds: Credentials, token_file: Path) -> None:
    try:
        token_file.parent.mkdir(parents=True, exist_ok=True)
        with token_file.open('wb') as f:
            pickle.dump(creds, f)
    except OSError as e:
        # The credentials still work for this run
        logger.warning(f"Could not cache token at {token_file}: {e}")


def load_credentials(
    credentials_path: str,
    token_path: str,
    scopes: Optional[Sequence[str]] = None,
) -> Credentials:
    """
    Working Gmail credentials: cached, refreshed, or freshly authorized.

    Raises:
        MailboxError: when no working credentials can be obtained
    """
    scopes = list(scopes) if scopes is not None else DEFAULT_SCOPES
    token_file = Path(token_path)

    creds = read_cached_token(token_file)
    if creds is not None and creds.valid:
        logger.debug(f"Using cached token {token_file}")
        return creds

    if creds is not None and creds.expired and creds.refresh_token:
        creds = refresh_token(creds, token_file)
    else:
        creds = None

    if creds is None:
        creds = authorize(Path(credentials_path), scopes)

    save_token(creds, token_file)
    return creds
