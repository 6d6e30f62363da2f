"""Decorations, hooks, and the context object plugins receive.

Decorations are insert-once: the first value registered under a name
stays, and later attempts are logged and ignored::

    app.decorate("db", pool)
    app.decorate("db", other_pool)   # warning, pool is kept
    app.db is pool                   # True

Every plugin receives the same ``PluginContext`` instance, so decorations
added by an earlier plugin are visible to every later one.
"""

import logging
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from fauxify.app import Adapter

logger = logging.getLogger("fauxify.context")


class DecorationRegistry(Mapping[str, Any]):
    """Insert-once mapping of decoration name to value.

    *reserved* names are refused outright: they belong to the object the
    decorations are exposed on and could never be read back.
    """

    __slots__ = ("_items", "_kind", "_reserved")

    def __init__(self, kind: str, reserved: frozenset[str] = frozenset()) -> None:
        self._kind = kind
        self._reserved = reserved
        self._items: dict[str, Any] = {}

    def add(self, name: str, value: Any) -> bool:
        """Store *value* under *name*. Returns False if the name was taken."""
        if name in self._items:
            logger.warning("Attempted to overwrite a %s named %s", self._kind, name)
            return False
        if name in self._reserved:
            logger.warning("Refused a %s named %s: the name is reserved", self._kind, name)
            return False
        self._items[name] = value
        return True

    def view(self) -> Mapping[str, Any]:
        """Read-only live view of the decorations."""
        return MappingProxyType(self._items)

    def __getitem__(self, name: str) -> Any:
        return self._items[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"DecorationRegistry({self._kind!r}, {sorted(self._items)!r})"


@dataclass(frozen=True, slots=True)
class HookEntry:
    """A lifecycle hook registration. Stored for inspection, never run."""

    event: str
    callback: Callable[..., Any]


class PluginContext:
    """The object passed as the first argument to every plugin.

    Offers the registration capabilities of the adapter and attribute
    access to context decorations::

        async def db_plugin(app, options, done):
            app.decorate("db", await connect(options["dsn"]))

        async def widgets_plugin(app, options, done):
            db = app.db
            app.get("/widgets", list_widgets)

    Chaining methods (``decorate``, ``decorate_reply``, ``add_hook``)
    return the context itself.
    """

    __slots__ = ("_adapter",)

    def __init__(self, adapter: "Adapter") -> None:
        self._adapter = adapter

    # -- Routes --

    def get(self, url: str, options: Any = None, handler: Any = None) -> None:
        self._adapter.get(url, options, handler)

    def post(self, url: str, options: Any = None, handler: Any = None) -> None:
        self._adapter.post(url, options, handler)

    def put(self, url: str, options: Any = None, handler: Any = None) -> None:
        self._adapter.put(url, options, handler)

    def patch(self, url: str, options: Any = None, handler: Any = None) -> None:
        self._adapter.patch(url, options, handler)

    def delete(self, url: str, options: Any = None, handler: Any = None) -> None:
        self._adapter.delete(url, options, handler)

    def route(self, declaration: Any) -> None:
        self._adapter.route(declaration)

    # -- Plugins --

    def register(self, plugin: Callable[..., Any], options: Mapping[str, Any] | None = None) -> None:
        self._adapter.register(plugin, options)

    # -- Decorations and hooks --

    def decorate(self, name: str, value: Any) -> "PluginContext":
        self._adapter.decorate(name, value)
        return self

    def decorate_reply(self, name: str, value: Any) -> "PluginContext":
        self._adapter.decorate_reply(name, value)
        return self

    def add_hook(self, event: str, callback: Callable[..., Any]) -> "PluginContext":
        self._adapter.add_hook(event, callback)
        return self

    def has_decorator(self, name: str) -> bool:
        return self._adapter.has_decorator(name)

    def has_reply_decorator(self, name: str) -> bool:
        return self._adapter.has_reply_decorator(name)

    def add_content_type_parser(self, content_type: Any, parser: Any = None) -> None:
        self._adapter.add_content_type_parser(content_type, parser)

    def __getattr__(self, name: str) -> Any:
        return self._adapter._lookup_decoration(name)

    def __repr__(self) -> str:
        return f"PluginContext({self._adapter!r})"
