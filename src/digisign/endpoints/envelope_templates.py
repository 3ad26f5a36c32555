from __future__ import annotations

from typing import Any, Mapping, Optional

from ..models import Envelope, EnvelopeTemplate, EnvelopeTemplateDocument
from ..options import RequestOptions
from ..stream import FileResponse
from .base import METHOD_GET, CRUDEndpointMixin, ResourceEndpoint, ResourceId, Transport, resource_id


class EnvelopeTemplatesEndpoint(CRUDEndpointMixin[EnvelopeTemplate], ResourceEndpoint[EnvelopeTemplate]):
    resource_class = EnvelopeTemplate

    def __init__(self, parent: Transport):
        super().__init__(parent, "/api/envelope-templates")

    def use(self, id: ResourceId, body: Optional[Mapping[str, Any]] = None) -> Envelope:
        """Create a new envelope from the template."""
        return self._create_resource(
            self._post_request("/{id}/use", bindings={"id": resource_id(id)}, json=dict(body or {})),
            Envelope,
        )

    def documents(self, template: ResourceId) -> EnvelopeTemplateDocumentsEndpoint:
        return EnvelopeTemplateDocumentsEndpoint(self, template)


class EnvelopeTemplateDocumentsEndpoint(
    CRUDEndpointMixin[EnvelopeTemplateDocument],
    ResourceEndpoint[EnvelopeTemplateDocument],
):
    resource_class = EnvelopeTemplateDocument

    def __init__(self, parent: EnvelopeTemplatesEndpoint, template: ResourceId):
        super().__init__(
            parent,
            "/{template}/documents",
            RequestOptions(bindings={"template": resource_id(template)}),
        )

    def download(self, id: ResourceId, query: Optional[Mapping[str, Any]] = None) -> FileResponse:
        return self.stream(
            METHOD_GET,
            "/{id}/download",
            RequestOptions(bindings={"id": resource_id(id)}, query=dict(query or {})),
        )

    def positions(self, body: Mapping[str, Any]) -> None:
        self._put_request("/positions", json=dict(body))
