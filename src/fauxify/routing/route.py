"""RouteOptions and RouteDeclaration frozen dataclasses."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from fauxify._internal.types import Handler, Schema
from fauxify.errors import ConfigurationError

SUPPORTED_METHODS: frozenset[str] = frozenset({"GET", "POST", "PUT", "PATCH", "DELETE"})

_KNOWN_KEYS = frozenset({"method", "url", "handler", "before_handler", "schema"})


@dataclass(frozen=True, slots=True)
class RouteOptions:
    """Structured options for a method shorthand::

        app.post("/widgets", RouteOptions(schema=WIDGET_SCHEMA), create_widget)

    A plain mapping with the same keys is accepted too. Keys other than
    ``handler``, ``before_handler`` and ``schema`` are kept as ``extra``.
    """

    before_handler: Handler | None = None
    schema: Schema | None = None
    handler: Handler | None = None
    extra: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class RouteDeclaration:
    """A route waiting to be materialized onto the underlying server.

    Created by a method shorthand or ``route()``, consumed once.
    """

    method: str
    url: str
    handler: Any
    before_handler: Any = None
    schema: Schema | None = None
    extra: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def is_supported(self) -> bool:
        return self.method in SUPPORTED_METHODS

    @classmethod
    def from_mapping(cls, declaration: Mapping[str, Any]) -> "RouteDeclaration":
        """Build a declaration from a ``{"method", "url", "handler", ...}`` mapping."""
        method = declaration.get("method")
        url = declaration.get("url")
        if not isinstance(method, str) or not isinstance(url, str):
            msg = (
                "A route declaration needs string 'method' and 'url' entries, "
                f"got method={method!r}, url={url!r}."
            )
            raise ConfigurationError(msg)
        return cls(
            method=method.upper(),
            url=url,
            handler=declaration.get("handler"),
            before_handler=declaration.get("before_handler"),
            schema=declaration.get("schema"),
            extra=MappingProxyType(
                {k: v for k, v in declaration.items() if k not in _KNOWN_KEYS}
            ),
        )


def build_declaration(
    method: str,
    url: str,
    options: RouteOptions | Mapping[str, Any] | Handler | None = None,
    handler: Handler | None = None,
) -> RouteDeclaration:
    """Normalize the ``(url, options, handler)`` shorthand forms.

    - ``options`` callable: it is the handler, there are no options.
    - ``options`` a ``RouteOptions`` or mapping: its fields are kept and
      *method*, *url* and *handler* are merged in. A handler passed
      positionally takes precedence over one inside the options.
    """
    method = method.upper()
    if options is None:
        return RouteDeclaration(method=method, url=url, handler=handler)
    if isinstance(options, RouteOptions):
        return RouteDeclaration(
            method=method,
            url=url,
            handler=handler if handler is not None else options.handler,
            before_handler=options.before_handler,
            schema=options.schema,
            extra=MappingProxyType(dict(options.extra)),
        )
    if isinstance(options, Mapping):
        merged = dict(options)
        merged["method"] = method
        merged["url"] = url
        if handler is not None:
            merged["handler"] = handler
        return RouteDeclaration.from_mapping(merged)
    if callable(options):
        return RouteDeclaration(method=method, url=url, handler=options)
    msg = (
        f"Route options for {method} {url} must be a handler, mapping, "
        f"or RouteOptions, got {type(options).__name__}."
    )
    raise ConfigurationError(msg)
