"""FPL API data fetching using requests."""

import logging
from typing import Any, Optional

import requests

from .constants import FPL_BASE_URL
from .live_data import (
    build_element_type_map,
    build_fixture_status_map,
    build_live_stats_map,
    build_picks,
)
from .models import ElementType, FixtureStatus, LivePlayerStat, Pick
from .schemas import BootstrapStatic, EntryPicksResponse, FixturePayload, LiveEventResponse
from .utils import parse_payload

logger = logging.getLogger('fplive.data_fetcher')


class FPLDataFetcher:
    """Fetches and caches one gameweek's data from the FPL API."""

    def __init__(
        self,
        gameweek: int,
        session: Optional[requests.Session] = None,
        base_url: str = FPL_BASE_URL,
        timeout: float = 30,
    ):
        self.gameweek = gameweek
        self.session = session or requests.Session()
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self._bootstrap: Optional[BootstrapStatic] = None
        self._fixtures: Optional[list[FixturePayload]] = None
        self._live: Optional[LiveEventResponse] = None

    def get_json(self, endpoint: str) -> Any:
        """
        Fetch a JSON endpoint relative to the API base URL.

        Raises:
            requests.RequestException: If the request fails
        """
        url = f'{self.base_url}/{endpoint.lstrip("/")}'
        logger.debug(f'GET {url}')
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.RequestException as e:
            logger.error(f'Error fetching {url}: {e}')
            raise

    @property
    def bootstrap(self) -> BootstrapStatic:
        """Lazy load bootstrap-static (roles and players)."""
        if self._bootstrap is None:
            logger.info('Loading bootstrap data...')
            self._bootstrap = parse_payload(
                self.get_json('bootstrap-static/'), BootstrapStatic, 'bootstrap-static'
            )
        return self._bootstrap

    @property
    def fixtures(self) -> list[FixturePayload]:
        """Lazy load this gameweek's fixtures."""
        if self._fixtures is None:
            logger.info(f'Loading fixtures for gameweek {self.gameweek}...')
            data = self.get_json(f'fixtures/?event={self.gameweek}')
            self._fixtures = [parse_payload(f, FixturePayload, 'fixtures') for f in data]
        return self._fixtures

    @property
    def live(self) -> LiveEventResponse:
        """Lazy load live player stats."""
        if self._live is None:
            logger.info(f'Loading live stats for gameweek {self.gameweek}...')
            self._live = parse_payload(
                self.get_json(f'event/{self.gameweek}/live/'), LiveEventResponse, 'event live'
            )
        return self._live

    @property
    def live_stats(self) -> dict[int, LivePlayerStat]:
        return build_live_stats_map(self.live)

    @property
    def element_types(self) -> dict[int, ElementType]:
        return build_element_type_map(self.bootstrap)

    @property
    def fixture_statuses(self) -> dict[int, FixtureStatus]:
        return build_fixture_status_map(self.fixtures, self.bootstrap, self.gameweek)

    def get_picks(self, entry_id: int) -> list[Pick]:
        """Fetch an entry's squad for the gameweek."""
        data = self.get_json(f'entry/{entry_id}/event/{self.gameweek}/picks/')
        return build_picks(parse_payload(data, EntryPicksResponse, f'entry {entry_id} picks'))

    def refresh(self) -> None:
        """Drop cached live data and fixtures so the next access re-fetches them."""
        self._fixtures = None
        self._live = None
