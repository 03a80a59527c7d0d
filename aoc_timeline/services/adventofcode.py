"""Private leaderboard API integration service"""
import logging
from typing import Callable, Optional

import requests
from pydantic import ValidationError

from aoc_timeline.models.leaderboard import Snapshot
from aoc_timeline.services.secrets import SecretsError

logger = logging.getLogger(__name__)

USER_AGENT = "aoc-timeline/1.0.0 python-requests"


class FetchError(Exception):
    """Base exception for leaderboard retrieval errors"""
    pass


class AuthError(FetchError):
    """Remote service rejected the request, the session cookie is probably outdated"""
    pass


class TransportError(FetchError):
    """Network failure or unreadable response while fetching"""
    pass


class AdventOfCodeAPI:
    """
    Fetches private leaderboard snapshots with a session cookie.

    The cookie is either given directly or obtained from token_provider on
    the first fetch, so runs served entirely from cache never need it.
    """

    def __init__(self, session_token: Optional[str] = None,
                 base_url: str = "https://adventofcode.com", timeout: float = 30.0,
                 token_provider: Optional[Callable[[], str]] = None):
        if session_token is None and token_provider is None:
            raise ValueError("Either a session token or a token provider is required")
        self.session_token = session_token
        self.token_provider = token_provider
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout

    def _session(self) -> str:
        if self.session_token is None:
            try:
                self.session_token = self.token_provider()
            except SecretsError as e:
                logger.error(f"No session cookie available: {e}")
                raise AuthError(f"No session cookie available: {e}") from e
        return self.session_token

    def leaderboard_url(self, leaderboard_id: int, year: int) -> str:
        return f"{self.base_url}/{year}/leaderboard/private/view/{leaderboard_id}.json"

    def fetch(self, leaderboard_id: int, year: int) -> Snapshot:
        """
        Download the current snapshot of a private leaderboard.

        Raises:
            AuthError: If no cookie is available or the service answers with anything but 200
            TransportError: If the request fails or the body is not a snapshot
        """
        headers = {
            'Cookie': f'session={self._session()};',
            'Accept': 'application/json',
            'User-Agent': USER_AGENT
        }
        url = self.leaderboard_url(leaderboard_id, year)
        logger.info(f"Fetching leaderboard {leaderboard_id} for {year}")

        try:
            response = requests.get(url, headers=headers, timeout=self.timeout,
                                    allow_redirects=False)
        except requests.RequestException as e:
            logger.error(f"Request for leaderboard {leaderboard_id} failed: {e}")
            raise TransportError(f"Request for leaderboard {leaderboard_id} failed: {e}") from e

        if response.status_code != 200:
            logger.error(f"Leaderboard {leaderboard_id} fetch returned {response.status_code}")
            raise AuthError(
                f"Fetch of leaderboard {leaderboard_id} failed with status "
                f"{response.status_code}, session cookie probably outdated"
            )

        try:
            return Snapshot.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.error(f"Unreadable response for leaderboard {leaderboard_id}: {e}")
            raise TransportError(f"Unreadable response for leaderboard {leaderboard_id}: {e}") from e
