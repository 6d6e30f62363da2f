"""One-shot settlement channel.

A plugin load can be completed from two directions: the ``done`` callback
the plugin receives, and the plugin's own return (or exception). Whichever
arrives first wins; later attempts are ignored.

Backed by a single-slot anyio memory stream so the first outcome is
buffered even if nobody is waiting yet::

    settlement = Settlement()
    settlement.settle(None)          # True
    settlement.settle(ValueError())  # False, ignored
    error = await settlement.wait()  # None
"""

import anyio


class Settlement:
    """Accepts exactly one outcome: ``None`` for success, an exception for failure."""

    __slots__ = ("_receive", "_send", "_settled")

    def __init__(self) -> None:
        self._send, self._receive = anyio.create_memory_object_stream(1)
        self._settled = False

    @property
    def settled(self) -> bool:
        return self._settled

    def settle(self, error: BaseException | None = None) -> bool:
        """Record the outcome. Returns False if one was already recorded."""
        if self._settled:
            return False
        try:
            self._send.send_nowait(error)
        except (anyio.WouldBlock, anyio.ClosedResourceError):
            return False
        self._settled = True
        self._send.close()
        return True

    async def wait(self) -> BaseException | None:
        """Wait for the outcome and return it (the error, or None)."""
        with self._receive:
            return await self._receive.receive()
