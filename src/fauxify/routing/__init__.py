"""Route declarations and the deferred route registry."""

from fauxify.routing.registry import RouteRegistry
from fauxify.routing.route import (
    SUPPORTED_METHODS,
    RouteDeclaration,
    RouteOptions,
    build_declaration,
)

__all__ = [
    "SUPPORTED_METHODS",
    "RouteDeclaration",
    "RouteOptions",
    "RouteRegistry",
    "build_declaration",
]
