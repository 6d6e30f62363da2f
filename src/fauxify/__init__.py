"""Fauxify: run declarative, plugin-based route code on a middleware server.

Routes, plugins, hooks, and decorations are registered with the
declarative vocabulary; ``listen()`` translates them into ordered
``(req, res, next)`` pipelines on the underlying server.

Basic usage::

    from fauxify import create_adapter

    app = create_adapter(server, authorizer)

    async def create_widget(request, reply):
        reply.code(201).send({"name": request.body["name"]})

    app.post("/v1/widgets", {"schema": {"body": {"required": ["name"]}}}, create_widget)
    await app.listen(8080)
"""

__version__ = "0.1.0"
__all__ = [
    "Adapter",
    "AdapterConfig",
    "ConfigurationError",
    "FauxifyError",
    "PluginContext",
    "PluginLoadError",
    "Reply",
    "Request",
    "RouteDeclaration",
    "RouteOptions",
    "create_adapter",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import fauxify`` fast while providing a clean top-level API.
    """
    if name in ("Adapter", "create_adapter"):
        import fauxify.app as _app

        return getattr(_app, name)

    if name == "AdapterConfig":
        from fauxify.config import AdapterConfig

        return AdapterConfig

    if name in ("ConfigurationError", "FauxifyError", "PluginLoadError"):
        import fauxify.errors as _errors

        return getattr(_errors, name)

    if name == "PluginContext":
        from fauxify.context import PluginContext

        return PluginContext

    if name in ("Reply", "Request"):
        import fauxify.http as _http

        return getattr(_http, name)

    if name in ("RouteDeclaration", "RouteOptions"):
        import fauxify.routing.route as _route

        return getattr(_route, name)

    msg = f"module 'fauxify' has no attribute {name!r}"
    raise AttributeError(msg)
