"""Plugin loading.

Plugins are recorded at ``register`` time and run once, in order, when
the adapter starts listening. Each receives ``(context, options, done)``:

- ``async def`` plugins are awaited. Calling ``done(error)`` fails the
  load immediately and cancels whatever the plugin is still awaiting.
  Returning normally (or calling ``done()``) succeeds.
- plain ``def`` plugins must call ``done()`` (or ``done(error)``); the load
  waits for that call. Raising fails the load.

Any falsy value passed to ``done`` means success; a truthy value that is
not an exception is reported as a ``RuntimeError``.

A failed load is logged and the next plugin runs anyway. Plugins that a
plugin registers while loading are queued behind it and loaded in the
same pass.

There is no deadline by default: a plugin that never settles stalls the
ones after it. ``AdapterConfig(plugin_timeout=...)`` bounds each load.
"""

import logging
from collections import deque
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import anyio

from fauxify._internal.invoke import is_async_callable
from fauxify._internal.settle import Settlement
from fauxify._internal.types import Plugin
from fauxify.errors import PluginLoadError

logger = logging.getLogger("fauxify.plugins")


def as_load_error(value: Any) -> BaseException | None:
    """Normalize the value a plugin passed to ``done``.

    Falsy values mean success. Exceptions are kept, anything else is
    wrapped in a ``RuntimeError`` carrying its repr.
    """
    if not value:
        return None
    if isinstance(value, BaseException):
        return value
    return RuntimeError(repr(value))


@dataclass(slots=True)
class PluginEntry:
    """A plugin and the options it was registered with."""

    plugin: Plugin
    options: Mapping[str, Any] = field(default_factory=dict)

    @property
    def name(self) -> str:
        return getattr(self.plugin, "__qualname__", None) or repr(self.plugin)


class PluginLoader:
    """Queue of plugins, loaded sequentially by ``run_all``."""

    __slots__ = ("_finished", "_queue", "_timeout")

    def __init__(self, *, timeout: float | None = None) -> None:
        self._queue: deque[PluginEntry] = deque()
        self._timeout = timeout
        self._finished = False

    def __len__(self) -> int:
        return len(self._queue)

    @property
    def finished(self) -> bool:
        return self._finished

    def register(self, plugin: Plugin, options: Mapping[str, Any] | None = None) -> None:
        """Record *plugin* for loading. No work happens yet."""
        entry = PluginEntry(plugin, {} if options is None else options)
        if self._finished:
            logger.debug(
                "Plugin %s was registered after loading finished; it will not be loaded",
                entry.name,
            )
            return
        self._queue.append(entry)

    async def run_all(self, context: Any) -> int:
        """Load every queued plugin in order. Returns the number that failed."""
        failures = 0
        while self._queue:
            entry = self._queue.popleft()
            try:
                await self.load(entry, context)
            except PluginLoadError:
                failures += 1
                logger.exception("Error loading plugin")
        self._finished = True
        return failures

    async def load(self, entry: PluginEntry, context: Any) -> None:
        """Load one plugin, raising ``PluginLoadError`` if it fails."""
        logger.debug("Loading plugin %s", entry.name)
        error: BaseException | None
        try:
            with anyio.fail_after(self._timeout):
                if is_async_callable(entry.plugin):
                    error = await self._load_async(entry, context)
                else:
                    error = await self._load_sync(entry, context)
        except TimeoutError as exc:
            error = exc
        if error is not None:
            raise PluginLoadError(entry.name, error) from error

    async def _load_async(self, entry: PluginEntry, context: Any) -> BaseException | None:
        settlement = Settlement()

        def done(error: Any = None) -> None:
            error = as_load_error(error)
            if error is not None:
                settlement.settle(error)

        async def run() -> None:
            try:
                await entry.plugin(context, entry.options, done)
            except Exception as exc:
                if not settlement.settle(exc):
                    logger.debug("Plugin %s raised after it settled: %r", entry.name, exc)
                return
            settlement.settle(None)

        async with anyio.create_task_group() as tg:
            tg.start_soon(run)
            error = await settlement.wait()
            if error is not None:
                tg.cancel_scope.cancel()
        return error

    async def _load_sync(self, entry: PluginEntry, context: Any) -> BaseException | None:
        settlement = Settlement()

        def done(error: Any = None) -> bool:
            return settlement.settle(as_load_error(error))

        try:
            entry.plugin(context, entry.options, done)
        except Exception as exc:
            settlement.settle(exc)
        return await settlement.wait()
