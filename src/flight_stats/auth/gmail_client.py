"""
# src/flight_stats/auth/gmail_client.py
# Gmail API client: booking search and message body retrieval
"""

import base64
import binascii
import threading
from typing import Any, Callable, Dict, Iterable, List, Optional

import google_auth_httplib2
import httplib2
from bs4 import BeautifulSoup
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from ..errors import ExtractionError, MailboxError
from ..utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_MAX_RESULTS = 300
PAGE_SIZE_LIMIT = 500

_API_ERRORS = (HttpError, httplib2.HttpLib2Error, OSError)


def build_sender_query(senders: Iterable[str]) -> str:
    """Gmail search expression matching mail from any of the senders."""
    return ' OR '.join(f'from:{sender}' for sender in senders)


def _decode_part(part_body: Dict[str, Any]) -> str:
    """Decode a base64url message part body."""
    data = part_body.get('data')
    if not data:
        return ''
    # Fix padding if needed
    pad_length = -len(data) % 4
    try:
        raw = base64.urlsafe_b64decode((data + '=' * pad_length).encode('ascii'))
    except (binascii.Error, UnicodeEncodeError, ValueError) as e:
        raise ExtractionError(f"Malformed message part encoding: {e}") from e
    return raw.decode('utf-8', errors='replace')


def html_to_text(html: str) -> str:
    return BeautifulSoup(html, 'html.parser').get_text(separator=' ', strip=True)


def extract_body(payload: Dict[str, Any]) -> Optional[str]:
    """
    Plain text of a message payload.

    text/plain parts win over text/html; HTML is reduced to its text.
    Returns None when the message has no readable part.

    Raises:
        ExtractionError: when a part cannot be decoded
    """
    text_content: List[str] = []
    html_content: List[str] = []

    def collect(part: Dict[str, Any]) -> None:
        mime_type = part.get('mimeType', '')
        if mime_type == 'text/plain':
            text = _decode_part(part.get('body', {}))
            if text:
                text_content.append(text)
        elif mime_type == 'text/html':
            html = _decode_part(part.get('body', {}))
            if html:
                html_content.append(html)
        for nested_part in part.get('parts', []) or []:
            collect(nested_part)

    collect(payload)

    if text_content:
        return '\n'.join(text_content)
    if html_content:
        return html_to_text('\n'.join(html_content))
    return None


class GmailClient:
    """
    Read-only Gmail access.

    Service objects from googleapiclient are not thread-safe, so each worker
    thread gets its own one from service_factory.
    """

    def __init__(self, service_factory: Callable[[], Any], user_id: str = 'me'):
        self._service_factory = service_factory
        self._local = threading.local()
        self.user_id = user_id

    @classmethod
    def from_credentials(cls, credentials: Credentials, timeout: float = 30.0) -> 'GmailClient':
        def factory():
            http = google_auth_httplib2.AuthorizedHttp(credentials, http=httplib2.Http(timeout=timeout))
            return build('gmail', 'v1', http=http, cache_discovery=False)
        return cls(factory)

    @property
    def service(self):
        service = getattr(self._local, 'service', None)
        if service is None:
            service = self._service_factory()
            self._local.service = service
        return service

    def search_messages(self, query: str, max_results: int = DEFAULT_MAX_RESULTS) -> List[str]:
        """
        Ids of the messages matching query, newest first, following pagination.

        Raises:
            MailboxError: when the search request fails
        """
        logger.debug(f"Search query: {query}")
        message_ids: List[str] = []
        next_page_token = None

        try:
            while len(message_ids) < max_results:
                result = self.service.users().messages().list(
                    userId=self.user_id,
                    q=query,
                    maxResults=min(max_results - len(message_ids), PAGE_SIZE_LIMIT),
                    pageToken=next_page_token,
                ).execute()

                message_ids.extend(msg['id'] for msg in result.get('messages', []))

                next_page_token = result.get('nextPageToken')
                if not next_page_token:
                    break
                logger.debug(f"Fetched {len(message_ids)} message ids so far...")
        except _API_ERRORS as e:
            logger.error(f"Error searching messages: {e}")
            raise MailboxError(f"Mailbox search failed: {e}") from e

        logger.info(f"Found {len(message_ids[:max_results])} booking messages")
        return message_ids[:max_results]

    def get_message_body(self, message_id: str) -> Optional[str]:
        """
        Decoded plain text body of a message, None if it has no text part.

        Raises:
            MailboxError: when the message cannot be fetched
            ExtractionError: when the payload encoding is malformed
        """
        try:
            message = self.service.users().messages().get(
                userId=self.user_id,
                id=message_id,
                format='full',
            ).execute()
        except _API_ERRORS as e:
            logger.error(f"Error getting message {message_id}: {e}")
            raise MailboxError(f"Message {message_id} unavailable: {e}") from e

        return extract_body(message.get('payload', {}))
