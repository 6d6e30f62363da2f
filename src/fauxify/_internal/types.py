"""Shared type aliases used across fauxify modules."""

from collections.abc import Callable, Mapping
from typing import Any, TypeAlias

# Declarative handler: (request, reply) when async, (request, reply, next) when sync
Handler: TypeAlias = Callable[..., Any]

# Middleware-style handler accepted by the underlying server: (req, res, next)
MiddlewareFn: TypeAlias = Callable[..., Any]

# Plugin: (context, options, done)
Plugin: TypeAlias = Callable[..., Any]

# Route schema: only ``schema["body"]["required"]`` is consulted
Schema: TypeAlias = Mapping[str, Any]
