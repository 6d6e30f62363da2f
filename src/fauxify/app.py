"""Fauxify adapter: the declarative API over a middleware server.

Mutable during setup (routes, plugins, decorations, hooks).
Drained once when ``listen()`` is awaited: plugins load, buffered routes
are materialized onto the server, then the server starts listening.
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any

from fauxify._internal.invoke import invoke
from fauxify._internal.log import enable_debug_logging
from fauxify._internal.types import Handler, Plugin
from fauxify.authz import AuthorizationBinder
from fauxify.config import AdapterConfig
from fauxify.context import DecorationRegistry, HookEntry, PluginContext
from fauxify.errors import ConfigurationError
from fauxify.plugins import PluginLoader
from fauxify.protocol import Authorizer
from fauxify.routing.registry import RouteRegistry
from fauxify.routing.route import RouteDeclaration, RouteOptions, build_declaration

logger = logging.getLogger("fauxify.app")

type RouteOptionsArg = RouteOptions | Mapping[str, Any] | Handler | None


class Adapter:
    """Declarative registration surface backed by a middleware server.

    Usage::

        server = make_express_style_server()
        app = Adapter(server, authorizer)

        async def widgets(app, options, done):
            app.get("/widgets", list_widgets)

        app.register(widgets, {"prefix": "/api"})
        await app.listen(8080)

    One adapter per underlying server; the adapter's state is not shared.
    """

    __slots__ = (
        "_binder",
        "_context",
        "_decorations",
        "_hooks",
        "_listening",
        "_plugins",
        "_reply_decorations",
        "_routes",
        "config",
        "server",
    )

    def __init__(
        self,
        server: Any,
        authorizer: Authorizer | None = None,
        *,
        config: AdapterConfig | None = None,
    ) -> None:
        self.config: AdapterConfig = config or AdapterConfig()
        self.server = server
        if self.config.debug:
            enable_debug_logging()

        self._decorations = DecorationRegistry("decoration", reserved=_RESERVED_NAMES)
        self._reply_decorations = DecorationRegistry("reply decoration")
        self._hooks: list[HookEntry] = []
        self._plugins = PluginLoader(timeout=self.config.plugin_timeout)
        self._binder = AuthorizationBinder(
            authorizer,
            disabled=self.config.disable_authorization,
            strict_version_prefix=self.config.strict_version_prefix,
        )
        self._routes = RouteRegistry(
            server,
            self._binder,
            self._reply_decorations.view(),
            strict=self.config.strict_routes,
        )
        self._context = PluginContext(self)
        self._listening = False

    # -- Route registration --

    def get(self, url: str, options: RouteOptionsArg = None, handler: Handler | None = None) -> None:
        self._routes.declare(build_declaration("GET", url, options, handler))

    def post(self, url: str, options: RouteOptionsArg = None, handler: Handler | None = None) -> None:
        self._routes.declare(build_declaration("POST", url, options, handler))

    def put(self, url: str, options: RouteOptionsArg = None, handler: Handler | None = None) -> None:
        self._routes.declare(build_declaration("PUT", url, options, handler))

    def patch(self, url: str, options: RouteOptionsArg = None, handler: Handler | None = None) -> None:
        self._routes.declare(build_declaration("PATCH", url, options, handler))

    def delete(self, url: str, options: RouteOptionsArg = None, handler: Handler | None = None) -> None:
        self._routes.declare(build_declaration("DELETE", url, options, handler))

    def route(self, declaration: RouteDeclaration | Mapping[str, Any]) -> None:
        """Register a full route declaration on the server right away.

        Unlike the method shorthands, this does not wait for ``listen()``.
        """
        if not isinstance(declaration, RouteDeclaration):
            declaration = RouteDeclaration.from_mapping(declaration)
        self._routes.materialize(declaration)

    def add_content_type_parser(self, content_type: Any, parser: Any = None) -> None:
        """Accepted for compatibility; body parsing belongs to the server."""
        logger.debug("Ignoring content type parser for %r", content_type)

    # -- Plugins --

    def register(self, plugin: Plugin, options: Mapping[str, Any] | None = None) -> None:
        """Queue *plugin* to be loaded with *options* when ``listen()`` runs."""
        self._plugins.register(plugin, options)

    # -- Decorations and hooks --

    def decorate(self, name: str, value: Any) -> "Adapter":
        """Expose *value* as ``name`` on the adapter and the plugin context."""
        self._decorations.add(name, value)
        return self

    def decorate_reply(self, name: str, value: Any) -> "Adapter":
        """Attach *value* as ``name`` on every reply object."""
        self._reply_decorations.add(name, value)
        return self

    def add_hook(self, event: str, callback: Callable[..., Any]) -> "Adapter":
        """Record a lifecycle hook. Hooks are stored but never invoked."""
        logger.debug("Storing %s hook; hooks are not executed", event)
        self._hooks.append(HookEntry(event, callback))
        return self

    def has_decorator(self, name: str) -> bool:
        return name in self._decorations

    def has_reply_decorator(self, name: str) -> bool:
        return name in self._reply_decorations

    @property
    def decorations(self) -> Mapping[str, Any]:
        return self._decorations.view()

    @property
    def reply_decorations(self) -> Mapping[str, Any]:
        return self._reply_decorations.view()

    @property
    def hooks(self) -> tuple[HookEntry, ...]:
        return tuple(self._hooks)

    @property
    def context(self) -> PluginContext:
        """The context object every plugin receives."""
        return self._context

    # -- Server --

    async def listen(self, *args: Any, **kwargs: Any) -> None:
        """Load plugins, materialize routes, then start the server.

        Arguments are forwarded to ``server.listen`` unchanged. Plugin
        failures are logged and never make this raise.
        """
        if self._listening:
            msg = "listen() has already been called on this adapter."
            raise ConfigurationError(msg)
        self._listening = True

        logger.debug("Registering plugins")
        failures = await self._plugins.run_all(self._context)
        if failures:
            logger.debug("%d plugin(s) failed to load", failures)

        logger.debug("Loading routes registered by plugins using method calls")
        self._routes.drain()

        logger.debug("Attempting to listen using args: %r %r", args, kwargs)
        await invoke(self.server.listen, *args, **kwargs)

    # -- Internal --

    def _lookup_decoration(self, name: str) -> Any:
        try:
            return self._decorations[name]
        except KeyError:
            msg = f"No decoration named {name!r}"
            raise AttributeError(msg) from None

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        return self._lookup_decoration(name)

    def __repr__(self) -> str:
        return f"Adapter(server={self.server!r}, listening={self._listening!r})"


def create_adapter(
    server: Any,
    authorizer: Authorizer | None = None,
    *,
    config: AdapterConfig | None = None,
) -> Adapter:
    """Build an adapter, reading ``DISABLE_KEYCLOAK``/``DEBUG`` when no config is given."""
    return Adapter(server, authorizer, config=config or AdapterConfig.from_env())


_RESERVED_NAMES: frozenset[str] = frozenset(
    name for name in (*dir(Adapter), *dir(PluginContext)) if not name.startswith("_")
)
