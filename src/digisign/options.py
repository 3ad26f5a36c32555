from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional
from urllib.parse import quote

_PLACEHOLDER = re.compile(r"\{(\w+)\}")


@dataclass(frozen=True)
class RequestOptions:
    """Per-request settings an endpoint passes down to the transport.

    ``bindings`` fill ``{name}`` placeholders in the path and are never sent as
    query or body. ``query`` becomes the query string, ``json`` the request body.
    """

    bindings: Mapping[str, Any] = field(default_factory=dict)
    query: Mapping[str, Any] = field(default_factory=dict)
    json: Any = None

    def merge(self, other: Optional[RequestOptions]) -> RequestOptions:
        """Combine two option sets; values from ``other`` win on collision."""
        if other is None:
            return self
        return RequestOptions(
            bindings={**self.bindings, **other.bindings},
            query={**self.query, **other.query},
            json=other.json if other.json is not None else self.json,
        )

    def query_params(self) -> dict[str, Any]:
        return {k: v for k, v in self.query.items() if v is not None}


def resolve_path(template: str, bindings: Mapping[str, Any]) -> str:
    def _sub(match: re.Match[str]) -> str:
        name = match.group(1)
        if name not in bindings or bindings[name] is None:
            raise ValueError(f"Missing value for path placeholder '{{{name}}}' in {template}")
        return quote(str(bindings[name]), safe="")

    return _PLACEHOLDER.sub(_sub, template)
