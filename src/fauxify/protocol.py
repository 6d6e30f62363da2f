"""Protocols for the collaborators fauxify sits between.

Nothing here needs a base class. The adapter checks the shape, not the
lineage: any express-style server, request, response, or authorizer that
matches these protocols works.

The underlying server runs middleware shaped like::

    async def middleware(req, res, next) -> None:
        res.set_header("X-Seen", "1")
        next()           # continue the pipeline
        # next(error)    # abort with an error
        # (no call)      # the response is complete
"""

from collections.abc import Awaitable, Mapping
from typing import Any, Protocol, runtime_checkable

from fauxify._internal.types import MiddlewareFn


class Next(Protocol):
    """Pipeline continuation. Called with no argument to proceed, or with an error."""

    def __call__(self, error: BaseException | None = None, /) -> Any: ...


@runtime_checkable
class RawRequest(Protocol):
    """Request object of the underlying server."""

    headers: Mapping[str, str]
    query: Mapping[str, Any]
    params: Mapping[str, str]
    body: Any


@runtime_checkable
class RawResponse(Protocol):
    """Response object of the underlying server."""

    def status(self, code: int) -> Any: ...

    def send(self, body: Any = None) -> Any: ...

    def set_header(self, name: str, value: str) -> Any: ...

    def get_header(self, name: str) -> str | None: ...


@runtime_checkable
class MiddlewareServer(Protocol):
    """The middleware-based server routes are materialized onto.

    One registration function per supported method, each taking the URL
    followed by the middleware pipeline in order.
    """

    def get(self, url: str, *middleware: MiddlewareFn) -> Any: ...

    def post(self, url: str, *middleware: MiddlewareFn) -> Any: ...

    def put(self, url: str, *middleware: MiddlewareFn) -> Any: ...

    def patch(self, url: str, *middleware: MiddlewareFn) -> Any: ...

    def delete(self, url: str, *middleware: MiddlewareFn) -> Any: ...

    def listen(self, *args: Any, **kwargs: Any) -> Awaitable[Any] | Any: ...


@runtime_checkable
class Authorizer(Protocol):
    """Permission engine.

    Given a ``"Resource:permission"`` key, returns a middleware that allows
    or rejects the request. The middleware is placed in the pipeline as-is.
    """

    def enforcer(self, permission_key: str) -> MiddlewareFn: ...
