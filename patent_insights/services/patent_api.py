"""
Patent API Client
patent_insights/services/patent_api.py

Issues one authenticated request to the search endpoint matching the
query type and returns the decoded JSON payload.

Endpoints (relative to the configured base URL):
    /patents/search/company?name=...&theme=...
    /patents/search/isin?isin=...&theme=...
    /patents/search/url?url=...&theme=...
    /patents/search/theme?theme=...
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from patent_insights.config import ApiConfig
from patent_insights.models.patent_insights import QueryType, SearchQuery

logger = logging.getLogger(__name__)

ERROR_BODY_PREVIEW = 200


class PatentSearchError(Exception):
    """Base class for failures inside the search pipeline."""


class NetworkError(PatentSearchError):
    """The patent API could not be reached."""


class HttpError(PatentSearchError):
    """The patent API answered with a non-success status."""

    def __init__(self, status: int, message: str = ""):
        self.status = status
        super().__init__(f"HTTP {status}: {message}" if message else f"HTTP {status}")


class ParseError(PatentSearchError):
    """The response body is not valid JSON."""


@dataclass(frozen=True)
class Endpoint:
    path: str
    value_param: str
    accepts_theme: bool = True


# One endpoint per query type
ENDPOINTS: Dict[QueryType, Endpoint] = {
    QueryType.company: Endpoint("patents/search/company", "name"),
    QueryType.isin: Endpoint("patents/search/isin", "isin"),
    QueryType.url: Endpoint("patents/search/url", "url"),
    QueryType.theme: Endpoint("patents/search/theme", "theme", accepts_theme=False),
}


def build_request_params(query: SearchQuery) -> Dict[str, str]:
    """Query string parameters for the endpoint serving `query`."""
    endpoint = ENDPOINTS[query.type]
    params = {endpoint.value_param: query.value}
    if query.theme and endpoint.accepts_theme:
        params["theme"] = query.theme
    return params


class PatentApiClient:
    """Thin async client for the patent search API. No retries."""

    def __init__(
        self,
        config: ApiConfig,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self._transport = transport

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.config.bearer_token.get_secret_value()}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    def _base_url(self) -> str:
        # Trailing slash so endpoint paths extend the base path instead of replacing it
        return self.config.base_url.rstrip("/") + "/"

    async def fetch(self, query: SearchQuery) -> Any:
        """
        Fetch the raw payload for a classified query.

        Raises:
            NetworkError: transport failure or unusable base URL
            HttpError: non-2xx response
            ParseError: body is not JSON
        """
        endpoint = ENDPOINTS[query.type]
        params = build_request_params(query)

        logger.info(f"   📥 Calling {query.type.value} search API: {endpoint.path}")
        logger.debug(f"   Base URL: {self.config.base_url}, token: {self.config.masked_token()}")

        try:
            async with httpx.AsyncClient(
                base_url=self._base_url(),
                timeout=self.config.timeout,
                transport=self._transport,
            ) as client:
                response = await client.get(endpoint.path, params=params, headers=self._headers())
        except httpx.TransportError as e:
            raise NetworkError(f"{type(e).__name__}: {e}") from e
        except httpx.InvalidURL as e:
            raise NetworkError(f"Invalid API URL: {e}") from e

        if not response.is_success:
            raise HttpError(response.status_code, response.text[:ERROR_BODY_PREVIEW])

        try:
            data = response.json()
        except ValueError as e:
            raise ParseError(f"Response is not valid JSON: {e}") from e

        logger.info(f"   ✅ Response received ({len(response.content)} bytes)")
        return data
