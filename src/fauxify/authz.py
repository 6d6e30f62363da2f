"""Authorization binding: route URL and method to a permission key.

Each route is protected by asking the authorizer for an enforcer keyed
``"{Resource}:{permission}"``. The resource is the first path segment,
capitalized; when that segment looks like an API version the next one is
used instead::

    GET    /widgets        -> Widgets:view
    GET    /v1/widgets     -> Widgets:view
    DELETE /orders/:id     -> Orders:delete

Methods map to permissions as GET=view, POST=create, PUT=update,
DELETE=delete. PATCH and anything else map to no permission, so those
routes get no enforcer.

Version detection: by default any first segment containing the letter
``v`` counts as a version token, which misreads resources such as
``/events`` or ``/reviews``. ``AdapterConfig(strict_version_prefix=True)``
narrows it to ``v<digits>``.
"""

import logging
import re
from typing import Any

from fauxify._internal.types import MiddlewareFn
from fauxify.protocol import Authorizer

logger = logging.getLogger("fauxify.authz")

PERMISSIONS: dict[str, str] = {
    "GET": "view",
    "POST": "create",
    "PUT": "update",
    "DELETE": "delete",
}

_VERSION_SEGMENT = re.compile(r"v\d+")


def _is_version_segment(segment: str, *, strict: bool) -> bool:
    if strict:
        return _VERSION_SEGMENT.fullmatch(segment) is not None
    return "v" in segment


def resource_for(url: str, *, strict_version_prefix: bool = False) -> str:
    """Capitalized resource name for *url*, or ``""`` if there is none."""
    parts = url.split("/")
    resource = parts[1] if len(parts) > 1 else ""
    if resource and _is_version_segment(resource, strict=strict_version_prefix):
        resource = parts[2] if len(parts) > 2 else ""
    return resource[:1].upper() + resource[1:]


def permission_for(method: str) -> str:
    """Permission name for an HTTP method, or ``""`` if unmapped."""
    return PERMISSIONS.get(method.upper(), "")


def permission_key(
    method: str, url: str, *, strict_version_prefix: bool = False
) -> str | None:
    """Derive ``"{Resource}:{permission}"``, or None when either part is empty."""
    resource = resource_for(url, strict_version_prefix=strict_version_prefix)
    permission = permission_for(method)
    if not resource or not permission:
        return None
    return f"{resource}:{permission}"


class AuthorizationBinder:
    """Produces the enforcement middleware for a route, if any.

    Disabled entirely when no authorizer is supplied or *disabled* is set;
    in that case no key is ever derived.
    """

    __slots__ = ("_authorizer", "_disabled", "_strict_version_prefix")

    def __init__(
        self,
        authorizer: Authorizer | None,
        *,
        disabled: bool = False,
        strict_version_prefix: bool = False,
    ) -> None:
        self._authorizer = authorizer
        self._disabled = disabled
        self._strict_version_prefix = strict_version_prefix

    @property
    def enabled(self) -> bool:
        return self._authorizer is not None and not self._disabled

    def bind(self, method: str, url: str) -> MiddlewareFn | None:
        """Return the enforcer middleware for this route, or None."""
        authorizer = self._authorizer
        if authorizer is None or self._disabled:
            return None
        key = permission_key(
            method, url, strict_version_prefix=self._strict_version_prefix
        )
        if key is None:
            logger.debug("No permission derived for %s %s; route is unprotected", method, url)
            return None
        logger.debug("Creating enforcer for %s %s with key %s", method, url, key)
        enforcer: Any = authorizer.enforcer(key)
        if not callable(enforcer):
            logger.debug("Authorizer returned no middleware for %s", key)
            return None
        return enforcer
