from __future__ import annotations

from typing import Any, ClassVar, Generic, Mapping, Optional, Protocol, Union

import httpx
from pydantic import ValidationError

from ..exceptions import EmptyResultError, ResponseParseError
from ..models import ListResource, R, Resource
from ..options import RequestOptions
from ..stream import FileResponse

METHOD_GET = "GET"
METHOD_POST = "POST"
METHOD_PUT = "PUT"
METHOD_PATCH = "PATCH"
METHOD_DELETE = "DELETE"

ResourceId = Union[str, Resource]


class Transport(Protocol):
    def request(
        self,
        method: str,
        path: str,
        options: Optional[RequestOptions] = None,
        *,
        stream: bool = False,
    ) -> httpx.Response: ...

    def parse_response(self, response: httpx.Response) -> Any: ...


def resource_id(value: ResourceId) -> str:
    if isinstance(value, Resource):
        if not value.id:
            raise ValueError(f"{type(value).__name__} has no id")
        return value.id
    return str(value)


class ResourceEndpoint(Generic[R]):
    """One REST collection: a base path, default options and a resource type.

    ``parent`` is either the root transport or another endpoint; in the latter
    case the child shares the parent's transport, extends its path and inherits
    its default options.
    """

    resource_class: ClassVar[type[Resource]] = Resource

    def __init__(
        self,
        parent: Union[Transport, ResourceEndpoint[Any]],
        resource_path: str,
        resource_options: Optional[RequestOptions] = None,
    ):
        if isinstance(parent, ResourceEndpoint):
            self._transport: Transport = parent.transport
            self._path = parent.base_path + resource_path
            self._options = parent.default_options.merge(resource_options)
        else:
            self._transport = parent
            self._path = resource_path
            self._options = resource_options or RequestOptions()

    @property
    def transport(self) -> Transport:
        return self._transport

    @property
    def base_path(self) -> str:
        return self._path

    @property
    def default_options(self) -> RequestOptions:
        return self._options

    def request(self, method: str, path: str = "", options: Optional[RequestOptions] = None) -> httpx.Response:
        return self._transport.request(method, self._path + path, self._options.merge(options))

    def stream(self, method: str, path: str = "", options: Optional[RequestOptions] = None) -> FileResponse:
        response = self._transport.request(method, self._path + path, self._options.merge(options), stream=True)
        return FileResponse(response)

    def _get_request(self, path: str = "", **options: Any) -> httpx.Response:
        return self.request(METHOD_GET, path, RequestOptions(**options))

    def _post_request(self, path: str = "", **options: Any) -> httpx.Response:
        return self.request(METHOD_POST, path, RequestOptions(**options))

    def _put_request(self, path: str = "", **options: Any) -> httpx.Response:
        return self.request(METHOD_PUT, path, RequestOptions(**options))

    def _patch_request(self, path: str = "", **options: Any) -> httpx.Response:
        return self.request(METHOD_PATCH, path, RequestOptions(**options))

    def _delete_request(self, path: str = "", **options: Any) -> httpx.Response:
        return self.request(METHOD_DELETE, path, RequestOptions(**options))

    def _make_create_request(self, body: Mapping[str, Any]) -> R:
        return self._make_resource(self._post_request(json=dict(body)))

    def _make_get_request(self, id: ResourceId) -> R:
        return self._make_resource(self._get_request("/{id}", bindings={"id": resource_id(id)}))

    def _make_update_request(self, id: ResourceId, body: Mapping[str, Any]) -> R:
        return self._make_resource(self._put_request("/{id}", bindings={"id": resource_id(id)}, json=dict(body)))

    def _make_delete_request(self, id: ResourceId) -> None:
        self._delete_request("/{id}", bindings={"id": resource_id(id)})

    def _make_list_request(self, query: Optional[Mapping[str, Any]] = None) -> ListResource[R]:
        return self._make_list_resource(self._get_request(query=dict(query or {})))

    def _parse_response(self, response: httpx.Response) -> dict[str, Any]:
        try:
            result = self._transport.parse_response(response)
        except ValueError as e:
            raise ResponseParseError(response, f"Unable to decode response body: {e}") from e
        if result is None:
            raise EmptyResultError(f"{response.request.method} {response.request.url} returned no content")
        if not isinstance(result, dict):
            raise ResponseParseError(response, f"Expected a JSON object, got {type(result).__name__}")
        return result

    def _make_resource(self, response: httpx.Response) -> R:
        return self._create_resource(response, self.resource_class)

    def _create_resource(self, response: httpx.Response, resource_class: type[Resource] = Resource) -> Any:
        data = self._parse_response(response)
        try:
            return resource_class.from_payload(data, response)
        except ValidationError as e:
            raise ResponseParseError(response, f"Unexpected {resource_class.__name__} shape: {e}") from e

    def _make_list_resource(self, response: httpx.Response) -> ListResource[R]:
        return self._create_list_resource(response, self.resource_class)

    def _create_list_resource(
        self,
        response: httpx.Response,
        resource_class: type[Resource] = Resource,
    ) -> ListResource[Any]:
        data = self._parse_response(response)

        def factory(raw: Mapping[str, Any]) -> Any:
            try:
                return resource_class.from_payload(raw, response)
            except (TypeError, ValueError) as e:
                raise ResponseParseError(response, f"Unexpected {resource_class.__name__} item shape: {e}") from e

        return ListResource(data, factory, response)


class CRUDEndpointMixin(Generic[R]):
    """Public create/get/update/delete/list on top of the ResourceEndpoint helpers."""

    def create(self, body: Mapping[str, Any]) -> R:
        return self._make_create_request(body)  # type: ignore[attr-defined]

    def get(self, id: ResourceId) -> R:
        return self._make_get_request(id)  # type: ignore[attr-defined]

    def update(self, id: ResourceId, body: Mapping[str, Any]) -> R:
        return self._make_update_request(id, body)  # type: ignore[attr-defined]

    def delete(self, id: ResourceId) -> None:
        self._make_delete_request(id)  # type: ignore[attr-defined]

    def list(self, query: Optional[Mapping[str, Any]] = None) -> ListResource[R]:
        return self._make_list_request(query)  # type: ignore[attr-defined]
