"""
BALLDONTLIE Extractor

Fetches regular-season player game logs from the BALLDONTLIE API.
Requires API key - get free key at https://app.balldontlie.io
"""

import time
from typing import Any, Optional

from core.logging import get_logger
from core.resilience import ClientError, ResilientHTTPClient, balldontlie_circuit
from core.settings import settings


class BalldontlieExtractor:
    """
    Extractor for NBA per-game stat lines via BALLDONTLIE /stats.

    The endpoint is cursor-paginated. A season is materialized in full
    before anything downstream runs, so a failure on any page fails the
    whole fetch.

    See: https://docs.balldontlie.io/
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        per_page: Optional[int] = None,
        page_delay: Optional[float] = None,
        http_client: Optional[ResilientHTTPClient] = None,
    ):
        """
        Initialize extractor.

        Args:
            api_key: BALLDONTLIE API key (defaults to settings)
            base_url: API root, e.g. https://api.balldontlie.io/v1
            per_page: Page size for /stats requests
            page_delay: Seconds to sleep between page requests
            http_client: Client to issue requests with; one with retry and
                the shared circuit breaker is built when omitted

        Raises:
            ValueError: If no API key is configured
        """
        self.log = get_logger("extractor.balldontlie")

        if api_key is None and settings.balldontlie_api_key is not None:
            api_key = settings.balldontlie_api_key.get_secret_value()
        if not api_key:
            raise ValueError(
                "BALLDONTLIE_API_KEY not configured. "
                "Get a free key at https://app.balldontlie.io"
            )

        self.base_url = (base_url or settings.balldontlie_base_url).rstrip("/")
        self.per_page = per_page if per_page is not None else settings.stats_page_size
        self.page_delay = page_delay if page_delay is not None else settings.stats_page_delay
        self.http = http_client or ResilientHTTPClient(
            max_retries=settings.retry_max_attempts,
            base_delay=settings.retry_base_delay,
            max_delay=settings.retry_max_delay,
            timeout=settings.http_timeout,
            circuit_breaker=balldontlie_circuit,
        )
        self._headers = {"Authorization": api_key}

    def _get_page(self, season: int, cursor: Optional[int]) -> dict:
        params: dict[str, Any] = {
            "seasons[]": season,
            "per_page": self.per_page,
            "postseason": "false",
        }
        if cursor is not None:
            params["cursor"] = cursor

        response = self.http.get(
            f"{self.base_url}/stats",
            params=params,
            headers=self._headers,
        )
        try:
            payload = response.json()
        except ValueError as e:
            raise ClientError(
                f"BALLDONTLIE /stats returned a non-JSON body: {e}",
                status_code=response.status_code,
            ) from e
        if not isinstance(payload, dict):
            raise ClientError(
                f"BALLDONTLIE /stats returned {type(payload).__name__}, expected an object",
                status_code=response.status_code,
            )
        return payload

    def get_season_stats(self, season: int) -> list[dict]:
        """
        Fetch every regular-season stat line for a season.

        Walks the cursor until the API stops returning one or a page comes
        back empty.

        Args:
            season: Season start year (e.g., 2024 for 2024-25)

        Returns:
            List of raw stat records in API order

        Raises:
            NetworkError, RateLimitError, ServerError: After retries are exhausted
            ClientError: On 4xx responses (e.g. an invalid API key) or a body
                that is not a JSON object
            CircuitBreakerError: If the BALLDONTLIE circuit is open
        """
        self.log.debug("season_stats_start", season=season)

        records: list[dict] = []
        cursor: Optional[int] = None
        page = 0

        while True:
            page += 1
            if page > 1 and self.page_delay > 0:
                time.sleep(self.page_delay)

            payload = self._get_page(season, cursor)
            data = payload.get("data") or []
            if not data:
                self.log.debug("fetch_page_empty", season=season, page=page)
                break

            records.extend(data)
            cursor = (payload.get("meta") or {}).get("next_cursor") or None
            self.log.debug(
                "fetch_page",
                season=season,
                page=page,
                count=len(data),
                next_cursor=cursor,
            )
            if cursor is None:
                break

        self.log.info("fetch_complete", season=season, pages=page, count=len(records))
        return records
