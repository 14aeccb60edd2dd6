"""Pytest fixtures: fake backend, HTTP client, state store and router."""

import httpx
import pytest

from src.integrations.clients.real_http.storefront_api import StorefrontApiClient
from src.storefront.router import ViewRouter
from src.storefront.state_store import AppStateStore
from src.utils.config_loader import StorefrontConfig
from tests.fake_backend import FakeStorefrontBackend

BASE_URL = "http://testserver"


@pytest.fixture
def backend():
    """In-memory FastAPI backend, fresh per test."""
    return FakeStorefrontBackend()


@pytest.fixture
def api_client(backend):
    return StorefrontApiClient(base_url=BASE_URL, transport=httpx.ASGITransport(app=backend.app))


@pytest.fixture
def unreachable_client():
    """Every request fails at the transport level."""

    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    return StorefrontApiClient(base_url=BASE_URL, transport=httpx.MockTransport(refuse))


@pytest.fixture
def store(api_client):
    return AppStateStore(api_client, config=StorefrontConfig())


@pytest.fixture
def confirmations():
    """Records confirm prompts; answers with the value of `answer`."""

    class Recorder:
        answer = True

        def __init__(self):
            self.prompts = []

        def __call__(self, message: str) -> bool:
            self.prompts.append(message)
            return self.answer

    return Recorder()


@pytest.fixture
def router(store, confirmations):
    return ViewRouter(store, confirm=confirmations)
