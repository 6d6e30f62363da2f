"""Declarative request and reply shapes handed to route handlers."""

from fauxify.http.reply import Reply
from fauxify.http.request import Request

__all__ = ["Reply", "Request"]
