"""Handler translation: declarative handlers as middleware.

``wrap_handler`` turns a handler written for the declarative API::

    async def create_widget(request, reply):
        reply.code(201).send({"name": request.body["name"]})

into a middleware the underlying server can run as ``(req, res, next)``.

Dispatch depends on the handler:

- ``async def`` handlers get ``(request, reply)``. Returning normally
  continues the pipeline with ``next()``; raising calls ``next(error)``
  instead, never both.
- plain ``def`` handlers get ``(request, reply, next)`` and decide for
  themselves whether to continue. Their return value is passed back to
  the server unchanged.

Before dispatch, a route declaring ``schema["body"]["required"]`` has its
request body checked for each named field. The first missing field ends
the request with a 400 and the handler is not called.
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from fauxify._internal.invoke import is_async_callable
from fauxify._internal.types import Handler, MiddlewareFn, Schema
from fauxify.http.reply import Reply
from fauxify.http.request import Request
from fauxify.protocol import Next, RawRequest, RawResponse

logger = logging.getLogger("fauxify.translate")


def required_body_fields(schema: Schema | None) -> tuple[str, ...]:
    """Field names listed under ``schema["body"]["required"]``.

    Returns an empty tuple when the route has no schema, no body schema,
    or a ``required`` entry that is not a list of names. Non-string
    entries are ignored.
    """
    if not isinstance(schema, Mapping):
        return ()
    body = schema.get("body")
    if not isinstance(body, Mapping):
        return ()
    required = body.get("required")
    if isinstance(required, (str, bytes)) or not isinstance(required, Sequence):
        return ()
    return tuple(name for name in required if isinstance(name, str))


def has_body(body: Any) -> bool:
    """True unless the body is absent or an empty string.

    An empty mapping still counts as a body and is checked.
    """
    if body is None:
        return False
    return not (isinstance(body, (str, bytes)) and len(body) == 0)


def first_missing_field(body: Any, required: Sequence[str]) -> str | None:
    """Return the first required field absent from *body*, or None.

    Only mapping bodies can carry fields; any other body lacks them all.
    """
    for name in required:
        if not isinstance(body, Mapping) or name not in body:
            return name
    return None


def wrap_handler(
    handler: Handler,
    reply_decorations: Mapping[str, Any] | None = None,
    schema: Schema | None = None,
) -> MiddlewareFn:
    """Wrap a declarative *handler* as a ``(req, res, next)`` middleware.

    *reply_decorations* is read on every request, so decorations added
    after wrapping still reach the reply.
    """
    required = required_body_fields(schema)
    run_async = is_async_callable(handler)

    async def middleware(req: RawRequest, res: RawResponse, next: Next) -> Any:
        reply = Reply(res, reply_decorations)
        request = Request.from_raw(req)

        if required and has_body(request.body):
            missing = first_missing_field(request.body, required)
            if missing is not None:
                logger.debug("Rejected request: body is missing %r", missing)
                return reply.code(400).send(
                    {"status": 400, "message": f"Request body must contain {missing}."}
                )

        if run_async:
            try:
                await handler(request, reply)
            except Exception as exc:
                return next(exc)
            return next()
        return handler(request, reply, next)

    middleware.__name__ = getattr(handler, "__name__", middleware.__name__)
    middleware.__wrapped__ = handler  # type: ignore[attr-defined]
    return middleware
