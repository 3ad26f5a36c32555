from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Generic, Iterator, Literal, Mapping, Optional, TypeVar, Union, overload

import httpx
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr
from pydantic.alias_generators import to_camel


class Resource(BaseModel):
    """Snapshot of one server-side entity decoded from a JSON response.

    Well-known fields are available as typed attributes; anything else is
    reachable through ``raw`` / ``resource["key"]``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    _raw: dict[str, Any] = PrivateAttr(default_factory=dict)
    _response: Optional[httpx.Response] = PrivateAttr(default=None)

    @classmethod
    def from_payload(cls, data: Mapping[str, Any], response: Optional[httpx.Response] = None):
        resource = cls.model_validate(dict(data))
        resource._raw = dict(data)
        resource._response = response
        return resource

    @property
    def raw(self) -> dict[str, Any]:
        return self._raw

    @property
    def response(self) -> Optional[httpx.Response]:
        return self._response

    def to_dict(self) -> dict[str, Any]:
        return dict(self._raw)

    def get(self, key: str, default: Any = None) -> Any:
        return self._raw.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self._raw[key]


class Envelope(Resource):
    status: Optional[str] = None
    email_subject: Optional[str] = None
    email_body: Optional[str] = None
    sender_name: Optional[str] = None
    sent_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None


class EnvelopeDocument(Resource):
    name: Optional[str] = None
    position: Optional[int] = None


class EnvelopeRecipient(Resource):
    role: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    mobile: Optional[str] = None
    status: Optional[str] = None


class EnvelopeTag(Resource):
    type: Optional[str] = None
    page: Optional[int] = None
    x_position: Optional[float] = None
    y_position: Optional[float] = None
    recipient: Any = None


class EnvelopeTemplate(Resource):
    title: Optional[str] = None
    email_subject: Optional[str] = None


class EnvelopeTemplateDocument(Resource):
    name: Optional[str] = None
    position: Optional[int] = None


R = TypeVar("R", bound=Resource)


class ListResource(Generic[R]):
    """One page of a paginated listing.

    Resources are built from the raw ``items`` on every iteration, so the same
    page can be walked any number of times without touching the network.
    """

    def __init__(
        self,
        payload: Mapping[str, Any],
        factory: Callable[[Mapping[str, Any]], R],
        response: Optional[httpx.Response] = None,
    ):
        self._payload = dict(payload)
        self._items: list[Mapping[str, Any]] = list(self._payload.get("items") or [])
        self._factory = factory
        self._response = response

    @property
    def raw(self) -> dict[str, Any]:
        return self._payload

    @property
    def response(self) -> Optional[httpx.Response]:
        return self._response

    @property
    def total(self) -> int:
        return int(self._payload.get("count") or len(self._items))

    @property
    def page(self) -> int:
        return int(self._payload.get("page") or 1)

    @property
    def limit(self) -> int:
        return int(self._payload.get("itemsPerPage") or len(self._items))

    @property
    def has_next_page(self) -> bool:
        return self.page * self.limit < self.total

    @property
    def items(self) -> list[R]:
        return list(self)

    def __iter__(self) -> Iterator[R]:
        for raw in self._items:
            yield self._factory(raw)

    def __len__(self) -> int:
        return len(self._items)

    @overload
    def __getitem__(self, index: int) -> R: ...

    @overload
    def __getitem__(self, index: slice) -> list[R]: ...

    def __getitem__(self, index: Union[int, slice]) -> Union[R, list[R]]:
        if isinstance(index, slice):
            return [self._factory(raw) for raw in self._items[index]]
        return self._factory(self._items[index])


class AccessToken(BaseModel):
    token: str
    exp: int = Field(..., ge=0)

    def expires_within(self, seconds: int, now: int) -> bool:
        return now + seconds >= self.exp


class DownloadResult(BaseModel):
    envelope_id: str
    out_dir: Path
    downloaded_files: list[Path] = Field(default_factory=list)
    failures: list[str] = Field(default_factory=list)
    started_at: datetime
    finished_at: datetime
    status: Literal["ok", "partial", "failed"]
