from __future__ import annotations

import logging
from typing import Any, Callable, Optional

import httpx
from tenacity import Retrying, retry_if_exception, stop_after_attempt, wait_exponential_jitter

from . import __version__
from .auth import TokenProvider
from .config import Settings
from .endpoints import EnvelopesEndpoint, EnvelopeTemplatesEndpoint
from .exceptions import NotFoundError, TransientTransportError, TransportError
from .options import RequestOptions, resolve_path

logger = logging.getLogger(__name__)


def _is_transient_status(code: int) -> bool:
    return code in (408, 409, 425, 429) or code >= 500


IDEMPOTENT_METHODS = frozenset({"GET", "HEAD", "OPTIONS", "PUT", "DELETE"})

# a non-idempotent request is only repeated when the server cannot have acted on it
UNPROCESSED_STATUSES = frozenset({429, 503})


def _should_retry(method: str) -> Callable[[BaseException], bool]:
    if method.upper() in IDEMPOTENT_METHODS:
        return lambda e: isinstance(e, (httpx.TransportError, TransientTransportError))

    def _unprocessed(e: BaseException) -> bool:
        if isinstance(e, (httpx.ConnectError, httpx.ConnectTimeout)):
            return True
        return isinstance(e, TransientTransportError) and e.status_code in UNPROCESSED_STATUSES

    return _unprocessed


class DigiSignClient:
    """Root of the endpoint tree: owns the HTTP session, credentials and base URL.

    Every endpoint request ends up in :meth:`request`.
    """

    def __init__(self, settings: Settings, http: Optional[httpx.Client] = None):
        self._settings = settings
        self._owns_http = http is None
        self._http = http or httpx.Client(timeout=httpx.Timeout(settings.http_timeout_s))
        self._tokens = TokenProvider(settings, self._http)

    @property
    def settings(self) -> Settings:
        return self._settings

    def envelopes(self) -> EnvelopesEndpoint:
        return EnvelopesEndpoint(self)

    def envelope_templates(self) -> EnvelopeTemplatesEndpoint:
        return EnvelopeTemplatesEndpoint(self)

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._tokens.token()}",
            "Accept": "application/json",
            "User-Agent": f"digisign-python/{__version__}",
        }

    def _raise_for_status(self, resp: httpx.Response) -> None:
        if resp.is_success:
            return
        resp.read()
        resp.close()
        msg = f"{resp.request.method} {resp.request.url} -> {resp.status_code}: {resp.text}"
        if resp.status_code == 404:
            raise NotFoundError(msg, resp)
        if _is_transient_status(resp.status_code):
            raise TransientTransportError(msg, resp)
        raise TransportError(msg, resp)

    def _send(self, method: str, url: str, options: RequestOptions, stream: bool) -> httpx.Response:
        params = options.query_params() or None
        request = self._http.build_request(method, url, params=params, json=options.json, headers=self._headers())
        logger.debug("Request: %s %s", method, request.url)
        response = self._http.send(request, stream=stream)

        if response.status_code == 401:
            logger.info("Access token rejected, fetching a new one")
            response.close()
            self._tokens.invalidate()
            request = self._http.build_request(method, url, params=params, json=options.json, headers=self._headers())
            response = self._http.send(request, stream=stream)

        logger.debug("Response: %s %s -> %d", method, request.url, response.status_code)
        self._raise_for_status(response)
        return response

    def request(
        self,
        method: str,
        path: str,
        options: Optional[RequestOptions] = None,
        *,
        stream: bool = False,
    ) -> httpx.Response:
        options = options or RequestOptions()
        url = f"{self._settings.base_url()}{resolve_path(path, options.bindings)}"
        retrying = Retrying(
            retry=retry_if_exception(_should_retry(method)),
            stop=stop_after_attempt(self._settings.max_retries),
            wait=wait_exponential_jitter(initial=0.5, max=30.0),
            reraise=True,
        )
        try:
            return retrying(self._send, method, url, options, stream)
        except httpx.TransportError as e:
            raise TransportError(f"{method} {url} failed: {e}") from e

    def parse_response(self, response: httpx.Response) -> Any:
        """Decode a JSON body; ``None`` when the server sent nothing."""
        self._raise_for_status(response)
        if response.status_code == 204 or not response.content.strip():
            return None
        return response.json()

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> DigiSignClient:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
