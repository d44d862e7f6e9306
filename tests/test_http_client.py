import json

import httpx
import pytest

from api.errors import ApiError, AuthFailure, NetworkFailure, NotFound, ValidationFailure
from api.http_client import ApiClient

BASE_URL = "http://backend.test"


def client_for(handler, token=None) -> ApiClient:
    return ApiClient(
        base_url=BASE_URL,
        timeout=3,
        token_provider=lambda: token,
        transport=httpx.MockTransport(handler),
    )


def test_bearer_token_is_attached():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json=[])

    client_for(handler, token="abc").get("/categories")
    assert seen[0].headers["Authorization"] == "Bearer abc"
    assert seen[0].url == f"{BASE_URL}/categories"


def test_no_token_no_header():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"token": "t"})

    client_for(handler, token="abc").post("/users/login", json={"username": "u"}, auth=False)
    client_for(handler, token=None).get("/categories")
    assert "Authorization" not in seen[0].headers
    assert "Authorization" not in seen[1].headers


def test_json_body_and_params_are_sent():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={})

    client = client_for(handler)
    client.get("/transactions", params={"page": 1, "size": 100})
    client.put("/transactions/7", json={"amount": 12.5})

    assert seen[0].url.params["page"] == "1"
    assert seen[1].method == "PUT"
    assert json.loads(seen[1].content) == {"amount": 12.5}


def test_empty_body_is_none():
    assert client_for(lambda r: httpx.Response(204)).delete("/categories/food") is None


@pytest.mark.parametrize("status, error_type", [
    (401, AuthFailure),
    (404, NotFound),
    (400, ValidationFailure),
    (409, ValidationFailure),
    (422, ValidationFailure),
    (500, ApiError),
    (503, ApiError),
])
def test_status_mapping(status, error_type):
    client = client_for(lambda r: httpx.Response(status, json={"message": "nope"}))
    with pytest.raises(error_type) as info:
        client.get("/transactions")
    assert info.value.status_code == status
    assert info.value.message == "nope"


def test_error_message_falls_back_to_status():
    client = client_for(lambda r: httpx.Response(500, text="<html>oops</html>"))
    with pytest.raises(ApiError) as info:
        client.get("/transactions")
    assert info.value.message == "HTTP error! status: 500"


def test_error_field_is_used_when_message_missing():
    client = client_for(lambda r: httpx.Response(400, json={"error": "Bad Request"}))
    with pytest.raises(ValidationFailure) as info:
        client.get("/transactions")
    assert info.value.message == "Bad Request"


def test_timeout_is_network_failure():
    def handler(request):
        raise httpx.ReadTimeout("slow", request=request)

    with pytest.raises(NetworkFailure) as info:
        client_for(handler).get("/transactions")
    assert "timeout" in info.value.message


def test_connection_error_is_network_failure():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(NetworkFailure) as info:
        client_for(handler).get("/transactions")
    assert info.value.message == "Network error"


def test_undecodable_body_is_network_failure():
    client = client_for(lambda r: httpx.Response(200, content=b"not json"))
    with pytest.raises(NetworkFailure):
        client.get("/transactions")
