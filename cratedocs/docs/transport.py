"""HTTP GET capability used by the resolver and the service.

Wraps an injected ``httpx.AsyncClient`` so tests can swap in an
``httpx.MockTransport``. Transport failures and body read failures are raised
as separate error types; status codes are returned, not raised.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Dict, Any

import httpx

from cratedocs.config import Settings
from cratedocs.errors import TransportError, BodyReadError

logger = logging.getLogger(__name__)


@dataclass
class FetchResponse:
    """Status and decoded body of a completed GET."""
    status_code: int
    reason: str
    body: str

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def status(self) -> str:
        return f"{self.status_code} {self.reason}".strip()


def build_client(settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> httpx.AsyncClient:
    """Create the shared async client with the configured User-Agent."""
    kwargs: Dict[str, Any] = {
        "headers": {"User-Agent": settings.user_agent},
        "follow_redirects": True,
    }
    if settings.timeout is not None:
        kwargs["timeout"] = settings.timeout
    if transport is not None:
        kwargs["transport"] = transport
    return httpx.AsyncClient(**kwargs)


class DocsTransport:
    """Issues GET requests with a fixed client-identification header."""

    def __init__(self, client: httpx.AsyncClient, user_agent: str):
        self.client = client
        self.user_agent = user_agent

    async def get(self, url: str, params: Optional[Dict[str, Any]] = None) -> FetchResponse:
        """
        Fetch ``url`` and read the whole body.

        Raises:
            TransportError: the request never produced a response
            BodyReadError: the response body could not be read or decoded
        """
        logger.debug(f"GET {url} params={params}")
        try:
            async with self.client.stream(
                "GET",
                url,
                params=params,
                headers={"User-Agent": self.user_agent},
            ) as response:
                try:
                    await response.aread()
                    body = response.text
                except (httpx.HTTPError, UnicodeDecodeError) as e:
                    raise BodyReadError(str(e)) from e
                return FetchResponse(
                    status_code=response.status_code,
                    reason=response.reason_phrase,
                    body=body,
                )
        except httpx.HTTPError as e:
            raise TransportError(str(e) or e.__class__.__name__) from e
