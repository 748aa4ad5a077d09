"""Shared fixtures: settings pointing at fake hosts and a recording fake upstream.

No network access; every request is answered by ``httpx.MockTransport``.
"""

from typing import Dict, List, Tuple, Union

import httpx
import pytest

from cratedocs.cache import CacheManager
from cratedocs.config import Settings
from cratedocs.docs import build_client
from cratedocs.service import CrateDocsService

DOCS_HOST = "https://docs.test"
REGISTRY_HOST = "https://registry.test"


class FakeUpstream:
    """Answers requests from a url -> (status, body) table and records every request.

    Routes are matched on scheme, host and path; query strings are ignored.
    A route value that is an exception instance is raised instead.
    """

    def __init__(self, routes: Dict[str, Union[Tuple[int, str], Exception]] = None):
        self.routes = dict(routes or {})
        self.requests: List[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = f"{request.url.scheme}://{request.url.host}{request.url.path}"
        route = self.routes.get(key)
        if route is None:
            return httpx.Response(404, text="<html><body><h1>Not Found</h1></body></html>")
        if isinstance(route, Exception):
            raise route
        status, body = route
        return httpx.Response(status, text=body)

    @property
    def urls(self) -> List[str]:
        return [str(request.url) for request in self.requests]

    @property
    def count(self) -> int:
        return len(self.requests)


@pytest.fixture
def settings() -> Settings:
    return Settings(docs_host=DOCS_HOST, registry_host=REGISTRY_HOST, user_agent="CrateDocsTest/1.0")


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def cache() -> CacheManager:
    return CacheManager()


@pytest.fixture
async def service(settings, upstream, cache):
    client = build_client(settings, transport=httpx.MockTransport(upstream.handler))
    service = CrateDocsService(settings, cache=cache, client=client)
    yield service
    await service.aclose()


def page(body: str, title: str = "Docs") -> str:
    """Wrap body HTML in a minimal rustdoc-like page."""
    return (
        f"<html><head><title>{title}</title><script>var x = 1;</script></head>"
        f"<body><nav class='sidebar'>Sidebar</nav><main>{body}</main></body></html>"
    )
