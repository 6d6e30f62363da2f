"""Deferred route registry.

Buffers declarations made through the method shorthands and, at listen
time, materializes each one onto the underlying server as an ordered
middleware pipeline::

    [before_handler] -> [authorization enforcer] -> handler

Materialization order is declaration order. Malformed routes (handler not
callable, method the server cannot register) are dropped with a debug
trace, or raise ``ConfigurationError`` when ``strict`` is set.
"""

import logging
from collections.abc import Mapping
from typing import Any

from fauxify._internal.types import MiddlewareFn
from fauxify.authz import AuthorizationBinder
from fauxify.errors import ConfigurationError
from fauxify.routing.route import RouteDeclaration
from fauxify.translate import wrap_handler

logger = logging.getLogger("fauxify.routing")


class RouteRegistry:
    """Append-only buffer of route declarations, drained once."""

    __slots__ = ("_binder", "_drained", "_pending", "_reply_decorations", "_server", "_strict")

    def __init__(
        self,
        server: Any,
        binder: AuthorizationBinder,
        reply_decorations: Mapping[str, Any],
        *,
        strict: bool = False,
    ) -> None:
        self._server = server
        self._binder = binder
        self._reply_decorations = reply_decorations
        self._strict = strict
        self._pending: list[RouteDeclaration] = []
        self._drained = False

    @property
    def pending(self) -> tuple[RouteDeclaration, ...]:
        return tuple(self._pending)

    @property
    def drained(self) -> bool:
        return self._drained

    def declare(self, declaration: RouteDeclaration) -> None:
        """Buffer a declaration for materialization at listen time."""
        if self._drained:
            logger.debug(
                "Route %s %s was declared after listen(); it will not be registered",
                declaration.method,
                declaration.url,
            )
            return
        self._pending.append(declaration)

    def drain(self) -> int:
        """Materialize every buffered declaration. Returns how many were registered."""
        logger.debug("Materializing %d deferred route(s)", len(self._pending))
        pending, self._pending = self._pending, []
        self._drained = True
        return sum(1 for declaration in pending if self.materialize(declaration))

    def materialize(self, declaration: RouteDeclaration) -> bool:
        """Register one declaration on the server. Returns False if it was dropped."""
        method, url = declaration.method, declaration.url
        if not callable(declaration.handler):
            return self._drop(declaration, "was missing a valid handler")
        if not declaration.is_supported:
            return self._drop(declaration, "uses a method the server cannot register")
        register = getattr(self._server, method.lower(), None)
        if not callable(register):
            return self._drop(declaration, "has no registration function on the server")

        logger.debug("Registering route - %s : %s", method, url)
        register(url, *self.build_pipeline(declaration))
        return True

    def build_pipeline(self, declaration: RouteDeclaration) -> list[MiddlewareFn]:
        """Assemble the ordered middleware for *declaration*."""
        pipeline: list[MiddlewareFn] = []
        if callable(declaration.before_handler):
            pipeline.append(wrap_handler(declaration.before_handler, self._reply_decorations))
        enforcer = self._binder.bind(declaration.method, declaration.url)
        if enforcer is not None:
            pipeline.append(enforcer)
        pipeline.append(
            wrap_handler(declaration.handler, self._reply_decorations, declaration.schema)
        )
        return pipeline

    def _drop(self, declaration: RouteDeclaration, reason: str) -> bool:
        message = f"Route {declaration.method} : {declaration.url} {reason}."
        if self._strict:
            raise ConfigurationError(message)
        logger.debug(message)
        return False
