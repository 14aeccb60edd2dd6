import asyncio

import httpx
import pytest

from src.integrations.clients.real_http.session import SessionFetcher
from src.integrations.clients.real_http.storefront_api import StorefrontApiClient
from src.utils.busy import BusyCounter


def make_fetcher(handler, busy=None):
    api = StorefrontApiClient(base_url="http://api.test", transport=httpx.MockTransport(handler))
    return SessionFetcher(api, busy or BusyCounter())


@pytest.mark.asyncio
async def test_json_content_type_is_default_and_caller_wins():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"ok": True})

    fetcher = make_fetcher(handler)

    await fetcher.authed_request("/cart/1", "MOCK_TOKEN")
    await fetcher.authed_request("/cart/1", "MOCK_TOKEN", headers={"Content-Type": "text/csv", "X-Trace": "abc"})

    assert seen[0].headers["content-type"] == "application/json"
    assert seen[1].headers["content-type"] == "text/csv"
    assert seen[1].headers["x-trace"] == "abc"


@pytest.mark.asyncio
async def test_credential_is_accepted_but_not_forwarded():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"id": 1})

    fetcher = make_fetcher(handler)
    await fetcher.authed_request("/users/me", "MOCK_TOKEN")

    assert SessionFetcher.forwards_credential is False
    assert "authorization" not in seen[0].headers
    assert "MOCK_TOKEN" not in str(seen[0].headers)


@pytest.mark.asyncio
async def test_busy_is_cleared_after_failure():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    busy = BusyCounter()
    flips = []
    busy.subscribe(flips.append)
    fetcher = make_fetcher(handler, busy)

    result = await fetcher.authed_request("/orders", "MOCK_TOKEN")

    assert result.value is None
    assert busy.busy is False
    assert flips == [True, False]


@pytest.mark.asyncio
async def test_overlapping_requests_stay_busy_until_last_settles():
    release = {"/fast": asyncio.Event(), "/slow": asyncio.Event()}

    async def handler(request):
        await release[request.url.path].wait()
        return httpx.Response(200, json={"path": request.url.path})

    busy = BusyCounter()
    fetcher = make_fetcher(handler, busy)

    fast = asyncio.create_task(fetcher.authed_request("/fast", "MOCK_TOKEN"))
    slow = asyncio.create_task(fetcher.authed_request("/slow", "MOCK_TOKEN"))
    await asyncio.sleep(0)
    assert busy.in_flight == 2

    release["/fast"].set()
    assert (await fast).value == {"path": "/fast"}
    assert busy.busy is True

    release["/slow"].set()
    assert (await slow).value == {"path": "/slow"}
    assert busy.busy is False
