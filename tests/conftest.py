import httpx
import pytest

from core.config import Config


class FakeBackend:
    """httpx.MockTransport wrapper that records every request it serves.

    ``routes`` maps a URL path to either a ``(status, json)`` tuple or a
    callable ``request -> httpx.Response``.  Unknown paths answer 404.
    """

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.requests: list[httpx.Request] = []
        self.transport = httpx.MockTransport(self.handle)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, json={"error": "RecordNotFound"})
        if callable(route):
            return route(request)
        status, payload = route
        return httpx.Response(status, json=payload)

    @property
    def paths(self) -> list[str]:
        return [r.url.path for r in self.requests]


@pytest.fixture
def generic_config():
    return Config(api_base="https://kb.example.com", site_name="Test Knowledge")


@pytest.fixture
def zendesk_config():
    return Config(
        backend="zendesk",
        api_base="https://acme.zendesk.com/api/v2",
        site_name="Acme Help Center",
        locale="en-us",
        email="agent@acme.com",
        api_token="s3cret",
    )


@pytest.fixture
def fake_backend():
    return FakeBackend()
