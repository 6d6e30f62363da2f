"""Fauxify exception hierarchy.

Shared across the route registry, plugin loader, and facade so every
module raises and catches the same types.
"""


class FauxifyError(Exception):
    """Base for all fauxify-specific errors."""


class ConfigurationError(FauxifyError):
    """Raised when a route declaration or adapter setup is invalid.

    Malformed routes only raise this under ``AdapterConfig(strict_routes=True)``;
    otherwise they are dropped with a debug trace.
    """


class PluginLoadError(FauxifyError):
    """A plugin failed to load.

    Raised inside the loader and caught there, so it never escapes
    ``Adapter.listen()``. The original failure is chained as ``__cause__``.
    """

    def __init__(self, plugin_name: str, cause: BaseException) -> None:
        self.plugin_name = plugin_name
        super().__init__(f"Plugin {plugin_name!r} failed to load: {cause!r}")
