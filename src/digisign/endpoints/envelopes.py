from __future__ import annotations

from typing import Any, Mapping, Optional

from ..models import Envelope, EnvelopeDocument, EnvelopeRecipient, EnvelopeTag, ListResource
from ..options import RequestOptions
from ..stream import FileResponse
from .base import METHOD_GET, CRUDEndpointMixin, ResourceEndpoint, ResourceId, Transport, resource_id


class EnvelopesEndpoint(CRUDEndpointMixin[Envelope], ResourceEndpoint[Envelope]):
    resource_class = Envelope

    def __init__(self, parent: Transport):
        super().__init__(parent, "/api/envelopes")

    def send(self, id: ResourceId) -> Envelope:
        return self._make_resource(self._post_request("/{id}/send", bindings={"id": resource_id(id)}))

    def cancel(self, id: ResourceId, body: Optional[Mapping[str, Any]] = None) -> Envelope:
        return self._make_resource(
            self._post_request("/{id}/cancel", bindings={"id": resource_id(id)}, json=dict(body or {}))
        )

    def download(self, id: ResourceId, query: Optional[Mapping[str, Any]] = None) -> FileResponse:
        """Download the whole envelope (signed documents, optionally with audit log)."""
        return self.stream(
            METHOD_GET,
            "/{id}/download",
            RequestOptions(bindings={"id": resource_id(id)}, query=dict(query or {})),
        )

    def documents(self, envelope: ResourceId) -> EnvelopeDocumentsEndpoint:
        return EnvelopeDocumentsEndpoint(self, envelope)

    def recipients(self, envelope: ResourceId) -> EnvelopeRecipientsEndpoint:
        return EnvelopeRecipientsEndpoint(self, envelope)


class EnvelopeDocumentsEndpoint(CRUDEndpointMixin[EnvelopeDocument], ResourceEndpoint[EnvelopeDocument]):
    resource_class = EnvelopeDocument

    def __init__(self, parent: EnvelopesEndpoint, envelope: ResourceId):
        super().__init__(
            parent,
            "/{envelope}/documents",
            RequestOptions(bindings={"envelope": resource_id(envelope)}),
        )

    def positions(self, body: Mapping[str, Any]) -> None:
        self._put_request("/positions", json=dict(body))

    def merge(self) -> EnvelopeDocument:
        return self._make_resource(self._post_request("/merge"))

    def download(self, id: ResourceId, query: Optional[Mapping[str, Any]] = None) -> FileResponse:
        return self.stream(
            METHOD_GET,
            "/{id}/download",
            RequestOptions(bindings={"id": resource_id(id)}, query=dict(query or {})),
        )

    def tags(self, id: ResourceId, query: Optional[Mapping[str, Any]] = None) -> ListResource[EnvelopeTag]:
        return self._create_list_resource(
            self._get_request("/{id}/tags", bindings={"id": resource_id(id)}, query=dict(query or {})),
            EnvelopeTag,
        )


class EnvelopeRecipientsEndpoint(CRUDEndpointMixin[EnvelopeRecipient], ResourceEndpoint[EnvelopeRecipient]):
    resource_class = EnvelopeRecipient

    def __init__(self, parent: EnvelopesEndpoint, envelope: ResourceId):
        super().__init__(
            parent,
            "/{envelope}/recipients",
            RequestOptions(bindings={"envelope": resource_id(envelope)}),
        )
