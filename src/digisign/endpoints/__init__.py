from .base import CRUDEndpointMixin, ResourceEndpoint, Transport
from .envelope_templates import EnvelopeTemplateDocumentsEndpoint, EnvelopeTemplatesEndpoint
from .envelopes import EnvelopeDocumentsEndpoint, EnvelopeRecipientsEndpoint, EnvelopesEndpoint

__all__ = [
    "CRUDEndpointMixin",
    "ResourceEndpoint",
    "Transport",
    "EnvelopesEndpoint",
    "EnvelopeDocumentsEndpoint",
    "EnvelopeRecipientsEndpoint",
    "EnvelopeTemplatesEndpoint",
    "EnvelopeTemplateDocumentsEndpoint",
]
