"""
Clock abstraction for the polling loop.

The poller never calls ``time`` or ``asyncio.sleep`` directly; it is handed a
Clock so that tests can run a three-minute polling budget in no time.
"""

from __future__ import annotations

import asyncio
import time
from typing import Protocol


class Clock(Protocol):
    def monotonic(self) -> float: ...

    async def sleep(self, seconds: float) -> None: ...


class SystemClock:
    """
    Wall-clock implementation backed by ``time.monotonic``.

    ``sleep`` is a plain ``asyncio.sleep`` so cancelling the awaiting task
    interrupts the wait immediately.
    """

    def monotonic(self) -> float:
        return time.monotonic()

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)
