"""Python client for the DigiSign e-signature REST API.

Usage:
    from digisign import DigiSignClient, Settings

    with DigiSignClient(Settings()) as dgs:
        envelope = dgs.envelopes().create({"emailSubject": "Contract"})
        documents = dgs.envelopes().documents(envelope)
        with documents.download("document-id") as file:
            file.save(Path("./out"))
"""

__version__ = "0.1.0"

from .client import DigiSignClient
from .config import Settings
from .exceptions import (
    AuthError,
    DigiSignError,
    EmptyResultError,
    NotFoundError,
    ResponseParseError,
    TransientTransportError,
    TransportError,
)
from .models import (
    Envelope,
    EnvelopeDocument,
    EnvelopeRecipient,
    EnvelopeTag,
    EnvelopeTemplate,
    EnvelopeTemplateDocument,
    ListResource,
    Resource,
)
from .options import RequestOptions
from .stream import FileResponse

__all__ = [
    "DigiSignClient",
    "Settings",
    "RequestOptions",
    "FileResponse",
    "Resource",
    "ListResource",
    "Envelope",
    "EnvelopeDocument",
    "EnvelopeRecipient",
    "EnvelopeTag",
    "EnvelopeTemplate",
    "EnvelopeTemplateDocument",
    "DigiSignError",
    "TransportError",
    "TransientTransportError",
    "NotFoundError",
    "ResponseParseError",
    "EmptyResultError",
    "AuthError",
]
