import httpx
import pytest
from fastapi.testclient import TestClient

from users_proxy.config import Settings
from users_proxy.main import create_app


class Upstream:
    """Records every request and answers with a configurable handler."""

    def __init__(self):
        self.requests = []
        self.handler = lambda request: httpx.Response(200, json=[])

    def __call__(self, request):
        self.requests.append(request)
        return self.handler(request)


@pytest.fixture
def settings():
    return Settings(port=12345)


@pytest.fixture
def upstream():
    return Upstream()


@pytest.fixture
def client(settings, upstream):
    app = create_app(settings, transport=httpx.MockTransport(upstream))
    return TestClient(app)


@pytest.fixture
def anyio_backend():
    return "asyncio"
