import httpx
import pytest
import respx

from conftest import API, FAR_FUTURE, make_settings

from digisign.client import DigiSignClient
from digisign.exceptions import NotFoundError, TransientTransportError, TransportError
from digisign.options import RequestOptions


def _client() -> DigiSignClient:
    return DigiSignClient(make_settings(), http=httpx.Client())


def _response(status: int, **kwargs) -> httpx.Response:
    return httpx.Response(status, request=httpx.Request("GET", "https://example.com"), **kwargs)


def test_raise_for_status_transient():
    with pytest.raises(TransientTransportError) as exc:
        _client()._raise_for_status(_response(503, text="oops"))
    assert exc.value.status_code == 503


def test_raise_for_status_not_found():
    with pytest.raises(NotFoundError):
        _client()._raise_for_status(_response(404, text="missing"))


def test_raise_for_status_fatal():
    with pytest.raises(TransportError) as exc:
        _client()._raise_for_status(_response(400, text="bad"))
    assert not isinstance(exc.value, TransientTransportError)
    assert "400" in str(exc.value)


def test_parse_response():
    c = _client()
    assert c.parse_response(_response(200, json={"a": 1})) == {"a": 1}
    assert c.parse_response(_response(204)) is None
    assert c.parse_response(_response(200, content=b"")) is None
    with pytest.raises(ValueError):
        c.parse_response(_response(200, content=b"<html>"))
    with pytest.raises(TransportError):
        c.parse_response(_response(500, text="boom"))


def test_request_resolves_placeholders_and_query(api, dgs):
    route = api.get("/api/envelopes/e1/documents").respond(200, json={"items": []})
    dgs.request(
        "GET",
        "/api/envelopes/{envelope}/documents",
        RequestOptions(bindings={"envelope": "e1"}, query={"page": 2, "status": None}),
    )
    request = route.calls.last.request
    assert request.url.raw_path == b"/api/envelopes/e1/documents?page=2"
    assert request.headers["Authorization"] == "Bearer tok"
    assert request.headers["User-Agent"].startswith("digisign-python/")


def test_request_missing_binding_raises(api, dgs):
    with pytest.raises(ValueError):
        dgs.request("GET", "/api/envelopes/{id}")


def test_request_refreshes_rejected_token(api):
    api.routes["auth"].side_effect = [
        httpx.Response(200, json={"token": "old", "exp": FAR_FUTURE}),
        httpx.Response(200, json={"token": "new", "exp": FAR_FUTURE}),
    ]
    route = api.get("/api/envelopes/e1")
    route.side_effect = [httpx.Response(401), httpx.Response(200, json={"id": "e1"})]

    with DigiSignClient(make_settings()) as client:
        response = client.request("GET", "/api/envelopes/e1")

    assert response.status_code == 200
    assert route.calls.last.request.headers["Authorization"] == "Bearer new"
    assert api.routes["auth"].call_count == 2


def test_request_retries_transient_failures(api):
    route = api.get("/api/envelopes")
    route.side_effect = [httpx.Response(503), httpx.Response(200, json={"items": []})]

    with DigiSignClient(make_settings(max_retries=2)) as client:
        response = client.request("GET", "/api/envelopes")

    assert response.status_code == 200
    assert route.call_count == 2


def test_request_does_not_retry_client_errors(api):
    route = api.get("/api/envelopes").respond(422, json={"message": "invalid"})

    with DigiSignClient(make_settings(max_retries=3)) as client:
        with pytest.raises(TransportError) as exc:
            client.request("GET", "/api/envelopes")

    assert exc.value.status_code == 422
    assert route.call_count == 1


def test_request_wraps_connection_errors(api, dgs):
    api.get("/api/envelopes").mock(side_effect=httpx.ConnectError("refused"))
    with pytest.raises(TransportError, match="refused"):
        dgs.request("GET", "/api/envelopes")


def test_close_leaves_external_http_client_open():
    http = httpx.Client()
    DigiSignClient(make_settings(), http=http).close()
    assert not http.is_closed
    http.close()


def test_settings_base_url_strips_trailing_slash():
    assert make_settings(api_url=f"{API}/").base_url() == API


def test_post_is_not_repeated_after_server_error(api):
    route = api.post("/api/envelopes")
    route.side_effect = [httpx.Response(500), httpx.Response(201, json={"id": "e1"})]

    with DigiSignClient(make_settings(max_retries=5)) as client:
        with pytest.raises(TransientTransportError) as exc:
            client.envelopes().create({"emailSubject": "NDA"})

    assert exc.value.status_code == 500
    assert route.call_count == 1


def test_post_is_not_repeated_after_read_timeout(api):
    route = api.post("/api/envelopes").mock(side_effect=httpx.ReadTimeout("slow"))

    with DigiSignClient(make_settings(max_retries=5)) as client:
        with pytest.raises(TransportError, match="slow"):
            client.envelopes().create({"emailSubject": "NDA"})

    assert route.call_count == 1


def test_post_is_retried_when_server_did_not_process_it(api):
    route = api.post("/api/envelopes")
    route.side_effect = [httpx.Response(429), httpx.Response(201, json={"id": "e1"})]

    with DigiSignClient(make_settings(max_retries=2)) as client:
        envelope = client.envelopes().create({"emailSubject": "NDA"})

    assert envelope.id == "e1"
    assert route.call_count == 2
