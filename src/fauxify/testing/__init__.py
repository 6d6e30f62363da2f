"""Test utilities for fauxify adapters.

An in-memory middleware server and a recording authorizer::

    from fauxify.testing import RecordingAuthorizer, RecordingServer
"""

from fauxify.testing.authz import RecordingAuthorizer
from fauxify.testing.server import (
    RecordingServer,
    RegisteredRoute,
    TestRequest,
    TestResponse,
    run_pipeline,
)

__all__ = [
    "RecordingAuthorizer",
    "RecordingServer",
    "RegisteredRoute",
    "TestRequest",
    "TestResponse",
    "run_pipeline",
]
