"""Reply object handed to declarative handlers.

Wraps the underlying response and writes to it on demand. ``code`` and
the header setters return the reply so calls chain::

    reply.code(201).header("Location", "/widgets/7").send({"id": 7})

Reply decorations registered with ``decorate_reply`` are attached as
instance attributes after construction, so a decoration named like a
base method shadows it (last write wins). Plain functions are bound to
the reply and receive it as their first argument::

    def created(reply, payload):
        return reply.code(201).send(payload)

    app.decorate_reply("created", created)
    # in a handler: reply.created({"id": 7})
"""

import inspect
from collections.abc import Mapping
from types import MethodType
from typing import Any


class Reply:
    """Declarative-style reply bound to one underlying response."""

    def __init__(self, raw: Any, decorations: Mapping[str, Any] | None = None) -> None:
        self.raw = raw
        self.sent = False
        if decorations:
            for name, value in decorations.items():
                if inspect.isfunction(value):
                    value = MethodType(value, self)
                setattr(self, name, value)

    def code(self, status: int) -> "Reply":
        """Set the status code."""
        self.raw.status(status)
        return self

    def header(self, name: str, value: str) -> "Reply":
        """Set a response header."""
        self.raw.set_header(name, value)
        return self

    def set_header(self, name: str, value: str) -> "Reply":
        return self.header(name, value)

    def get_header(self, name: str) -> str | None:
        """Read a header already set on the response."""
        return self.raw.get_header(name)

    def send(self, payload: Any = None) -> "Reply":
        """Write the response body. Terminal for the request."""
        self.raw.send(payload)
        self.sent = True
        return self

    def __repr__(self) -> str:
        return f"Reply(sent={self.sent!r})"
