"""Tests for fauxify.http.reply: chaining and writes to the raw response."""

from fauxify.http.reply import Reply
from fauxify.testing import TestResponse


def test_code_and_header_chain() -> None:
    res = TestResponse()
    reply = Reply(res)
    assert reply.code(201).header("Location", "/w/1").set_header("X-A", "a") is reply
    assert res.status_code == 201
    assert res.headers == {"location": "/w/1", "x-a": "a"}


def test_get_header_reads() -> None:
    res = TestResponse()
    reply = Reply(res)
    reply.header("Content-Type", "application/json")
    assert reply.get_header("content-type") == "application/json"
    assert reply.get_header("X-Missing") is None


def test_send_writes_and_marks_sent() -> None:
    res = TestResponse()
    reply = Reply(res)
    assert reply.sent is False
    reply.send({"ok": True})
    assert reply.sent is True
    assert res.body == {"ok": True}
    assert res.sent


def test_decorations_attached() -> None:
    reply = Reply(TestResponse(), {"answer": 42, "code": "shadowed"})
    assert reply.answer == 42
    assert reply.code == "shadowed"


def test_function_decorations_bound_to_reply() -> None:
    def created(reply: Reply, payload: object) -> Reply:
        return reply.code(201).send(payload)

    res = TestResponse()
    reply = Reply(res, {"created": created})
    assert reply.created({"ok": True}) is reply
    assert res.status_code == 201
    assert res.body == {"ok": True}


def test_non_function_callables_attached_as_is() -> None:
    class Counter:
        def __call__(self, n: int) -> int:
            return n + 1

    reply = Reply(TestResponse(), {"bump": Counter(), "limit": len})
    assert reply.bump(1) == 2
    assert reply.limit("abc") == 3
