import json
from typing import Any, Optional

import pytest
import respx

from digisign.client import DigiSignClient
from digisign.config import Settings

API = "https://api.digisign.test"

# 2100-01-01T00:00:00Z
FAR_FUTURE = 4102444800


def make_settings(**overrides: Any) -> Settings:
    values: dict[str, Any] = {
        "api_url": API,
        "access_key": "ACCESS_KEY",
        "secret_key": "SECRET_KEY",
        "max_retries": 1,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def api():
    with respx.mock(base_url=API, assert_all_called=False) as mock:
        mock.post("/api/auth-token", name="auth").respond(200, json={"token": "tok", "exp": FAR_FUTURE})
        yield mock


@pytest.fixture
def dgs(api):
    with DigiSignClient(make_settings()) as client:
        yield client


def assert_last_request(api, method: str, target: str, body: Optional[Any] = None) -> None:
    request = api.calls.last.request
    assert request.method == method
    assert request.url.raw_path.decode() == target
    assert request.headers["Authorization"] == "Bearer tok"
    if body is not None:
        assert json.loads(request.content) == body


def assert_crud_requests(api, endpoint, path: str) -> None:
    api.route(path__startswith=path).respond(200, json={"id": "foo", "items": []})

    endpoint.create({"foo": "bar"})
    assert_last_request(api, "POST", path, {"foo": "bar"})

    endpoint.get("foo")
    assert_last_request(api, "GET", f"{path}/foo")

    endpoint.update("foo", {"foo": "bar"})
    assert_last_request(api, "PUT", f"{path}/foo", {"foo": "bar"})

    assert endpoint.delete("foo") is None
    assert_last_request(api, "DELETE", f"{path}/foo")

    endpoint.list({"foo": "bar"})
    assert_last_request(api, "GET", f"{path}?foo=bar")
