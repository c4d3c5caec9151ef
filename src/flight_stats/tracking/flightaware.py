"""
# src/flight_stats/tracking/flightaware.py
# FlightAware tracking page fetcher and markup parser
"""

import re
from dataclasses import dataclass
from typing import Optional

import requests
from bs4 import BeautifulSoup

from ..errors import ResolutionError
from ..utils.logger import get_logger

logger = get_logger(__name__)

BASE_URL = 'https://flightaware.com/live/flight/'
DEFAULT_LOCALE = 'en_US'
DEFAULT_TIMEOUT = 30.0


@dataclass
class TrackingPage:
    """Raw text of the fields we read from a tracking page."""
    duration_text: str
    distance_text: str
    origin: str
    destination: str


def _collapse(text: str) -> str:
    return re.sub(r'\s+', ' ', text).strip()


def _select_text(soup: BeautifulSoup, selector: str) -> str:
    return ''.join(node.get_text() for node in soup.select(selector))


def _distance_text(soup: BeautifulSoup) -> str:
    texts = []
    for header in soup.select('.secondaryHeader'):
        if 'Distance' not in header.get_text():
            continue
        parent = header.parent
        if parent is None:
            continue
        texts.extend(cell.get_text() for cell in parent.select('.smallrow2'))
    return ''.join(texts)


def parse_tracking_page(markup: str) -> TrackingPage:
    """Pull duration, distance and route text out of a tracking page."""
    soup = BeautifulSoup(markup, 'html.parser')
    return TrackingPage(
        duration_text=_select_text(soup, '.track-panel-duration'),
        distance_text=_distance_text(soup),
        origin=_collapse(_select_text(soup, '.track-panel-departure')),
        destination=_collapse(_select_text(soup, '.track-panel-arrival')),
    )


class FlightAwareClient:
    """Fetches live tracking pages for flight codes."""

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        base_url: str = BASE_URL,
        locale: str = DEFAULT_LOCALE,
        session: Optional[requests.Session] = None,
    ):
        self.timeout = timeout
        self.base_url = base_url
        self.locale = locale
        self.session = session or requests.Session()
        # Without the locale cookie the page is served in the visitor's language
        self.session.cookies.set('w_locale', locale, domain='flightaware.com')

    def tracking_url(self, flight_code: str) -> str:
        return f"{self.base_url}{flight_code}?locale={self.locale}"

    def fetch_tracking_page(self, flight_code: str) -> str:
        """
        Fetch the raw tracking page markup for a flight code.

        Raises:
            ResolutionError: on network errors, timeouts or non-200 responses
        """
        url = self.tracking_url(flight_code)
        logger.debug(f"Fetching tracking page {url}")
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise ResolutionError(flight_code, f"network error: {e}") from e

        if response.status_code != 200:
            raise ResolutionError(flight_code, f"HTTP {response.status_code}")
        return response.text
