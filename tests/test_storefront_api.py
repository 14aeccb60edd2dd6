import httpx
import pytest

from src.integrations.clients.real_http.storefront_api import StorefrontApiClient, extract_error_detail
from src.integrations.contracts.storefront import FetchStatus
from src.integrations.errors import ApiError, NetworkFailure, ProtocolMismatchError

BASE_URL = "http://api.test"


def make_client(handler):
    seen = []

    def recording(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    client = StorefrontApiClient(base_url=BASE_URL + "/", transport=httpx.MockTransport(recording))
    return client, seen


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"id": 7, "name": "Air Max", "nested": {"tags": ["a", "b"]}},
        [{"id": 1}, {"id": 2}],
        [],
    ],
)
async def test_success_json_is_returned_unchanged(payload):
    client, seen = make_client(lambda request: httpx.Response(200, json=payload))

    result = await client.fetch_data("/anything")

    assert result.status == FetchStatus.SUCCESS
    assert result.data == payload
    assert await client.request("/anything") == payload
    assert str(seen[0].url) == "http://api.test/anything"


@pytest.mark.asyncio
async def test_error_detail_string_becomes_api_error():
    client, _ = make_client(lambda request: httpx.Response(400, json={"detail": "Username already registered"}))

    result = await client.fetch_data("/users/", method="POST", json_body={"username": "x"})

    assert result.is_failed
    assert result.value is None
    assert isinstance(result.error, ApiError)
    assert result.error.message == "Username already registered"
    assert result.error.status_code == 400


@pytest.mark.asyncio
async def test_error_detail_list_uses_first_msg():
    detail = [
        {"loc": ["body", "price"], "msg": "Input should be greater than 0", "type": "greater_than"},
        {"loc": ["body", "name"], "msg": "Field required", "type": "missing"},
    ]
    client, _ = make_client(lambda request: httpx.Response(422, json={"detail": detail}))

    result = await client.fetch_data("/products/", method="POST", json_body={})

    assert isinstance(result.error, ApiError)
    assert result.error.message == "Input should be greater than 0"


@pytest.mark.asyncio
async def test_error_without_detail_falls_back_to_reason_phrase():
    client, _ = make_client(lambda request: httpx.Response(500, json={"error": "boom"}))

    result = await client.fetch_data("/orders")

    assert result.error.message == "Internal Server Error"


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["/products", "/categories"])
async def test_non_json_success_on_collection_is_empty(path):
    client, _ = make_client(lambda request: httpx.Response(200, text="<html>maintenance</html>"))

    result = await client.fetch_collection(path)

    assert result.status == FetchStatus.EMPTY
    assert result.value == []


@pytest.mark.asyncio
async def test_non_json_elsewhere_is_protocol_mismatch_with_snippet():
    body = "x" * 250
    client, _ = make_client(lambda request: httpx.Response(200, text=body))

    result = await client.fetch_data("/users/me")

    assert result.is_failed
    assert isinstance(result.error, ProtocolMismatchError)
    assert result.error.snippet == "x" * 100
    assert "text/plain" in result.error.message
    assert "for /users/me" in result.error.message


@pytest.mark.asyncio
async def test_missing_content_type_is_reported_as_none():
    client, _ = make_client(lambda request: httpx.Response(204))

    result = await client.fetch_data("/categories/3", method="DELETE")

    assert isinstance(result.error, ProtocolMismatchError)
    assert "(none)" in result.error.message


@pytest.mark.asyncio
async def test_non_json_failure_on_collection_still_degrades_to_empty():
    client, _ = make_client(lambda request: httpx.Response(502, text="Bad Gateway"))

    result = await client.fetch_collection("/products")

    assert result.value == []
    assert isinstance(result.error, ProtocolMismatchError)


@pytest.mark.asyncio
async def test_malformed_json_is_protocol_mismatch():
    client, _ = make_client(
        lambda request: httpx.Response(200, content=b"{not json", headers={"content-type": "application/json"})
    )

    result = await client.fetch_data("/cart/1")

    assert isinstance(result.error, ProtocolMismatchError)


def _refuse(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("Connection refused", request=request)


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["/products", "/categories"])
async def test_network_failure_on_collection_is_empty_never_none(path):
    client, _ = make_client(_refuse)

    assert await client.request(path, empty_on_failure=True) == []
    result = await client.fetch_collection(path)
    assert result.status == FetchStatus.EMPTY
    assert isinstance(result.error, NetworkFailure)


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["/users/me", "/token", "/cart/add", "/orders", "/products"])
async def test_network_failure_elsewhere_is_none(path):
    client, _ = make_client(_refuse)

    assert await client.request(path) is None


@pytest.mark.asyncio
async def test_form_body_is_url_encoded():
    client, seen = make_client(lambda request: httpx.Response(200, json={"access_token": "x"}))

    await client.fetch_data(
        "/token",
        method="POST",
        headers={"Content-Type": "application/x-www-form-urlencoded"},
        form={"username": "jane", "password": "s3cret"},
    )

    assert seen[0].headers["content-type"] == "application/x-www-form-urlencoded"
    assert seen[0].content == b"username=jane&password=s3cret"


@pytest.mark.asyncio
async def test_health_check_reports_status():
    ok_client, _ = make_client(lambda request: httpx.Response(200, json={"message": "up"}))
    down_client, _ = make_client(lambda request: httpx.Response(503, text="down"))
    dead_client, _ = make_client(_refuse)

    assert await ok_client.check_api_health() is True
    assert await down_client.check_api_health() is False
    assert await dead_client.check_api_health() is False


@pytest.mark.asyncio
async def test_fastapi_validation_error_message(api_client):
    result = await api_client.fetch_data("/products/", method="POST", json_body={"name": "No price"})

    assert isinstance(result.error, ApiError)
    assert result.error.status_code == 422
    assert result.error.message == "Field required"


def test_extract_error_detail_variants():
    assert extract_error_detail({"detail": "Not found"}) == "Not found"
    assert extract_error_detail({"detail": [{"msg": "first"}, {"msg": "second"}]}) == "first"
    assert extract_error_detail({"detail": [{"loc": ["x"]}]}) == "Unknown API Error"
    assert extract_error_detail({}, fallback="Bad Request") == "Bad Request"
    assert extract_error_detail(["not", "a", "dict"]) == "Unknown API Error"
