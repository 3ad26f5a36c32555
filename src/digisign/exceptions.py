from __future__ import annotations

from typing import Optional

import httpx


class DigiSignError(RuntimeError):
    pass


class TransportError(DigiSignError):
    """Network failure or non-2xx response from the DigiSign API."""

    def __init__(self, message: str, response: Optional[httpx.Response] = None):
        super().__init__(message)
        self.response = response

    @property
    def status_code(self) -> Optional[int]:
        return self.response.status_code if self.response is not None else None


class TransientTransportError(TransportError):
    pass


class NotFoundError(TransportError):
    pass


class ResponseParseError(DigiSignError):
    """Response body could not be decoded into the expected structure."""

    def __init__(self, response: httpx.Response, message: str):
        super().__init__(message)
        self.response = response


class EmptyResultError(DigiSignError):
    def __init__(self, message: str = "Empty result"):
        super().__init__(message)


class AuthError(DigiSignError):
    pass
