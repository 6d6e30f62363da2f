"""Request projection handed to declarative handlers.

A frozen view over the underlying server's request: the four fields
handlers read, plus ``raw`` for anything else.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

_EMPTY: Mapping[str, Any] = MappingProxyType({})


@dataclass(frozen=True, slots=True)
class Request:
    """Declarative-style request.

    ``raw`` is a back-reference to the underlying request object; the
    projection does not own it.
    """

    headers: Mapping[str, Any] = _EMPTY
    query: Mapping[str, Any] = _EMPTY
    params: Mapping[str, Any] = _EMPTY
    body: Any = None
    raw: Any = field(default=None, repr=False, compare=False)

    @classmethod
    def from_raw(cls, req: Any) -> "Request":
        """Project an underlying request.

        Missing mapping attributes become empty mappings; a missing body
        stays ``None`` so "no body" and "empty body" remain distinct.
        """
        return cls(
            headers=_mapping(getattr(req, "headers", None)),
            query=_mapping(getattr(req, "query", None)),
            params=_mapping(getattr(req, "params", None)),
            body=getattr(req, "body", None),
            raw=req,
        )


def _mapping(value: Any) -> Mapping[str, Any]:
    return _EMPTY if value is None else value
