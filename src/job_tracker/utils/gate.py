"""Single-flight admission gate."""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from enum import StrEnum

from job_tracker.exceptions import Throttled


class GateState(StrEnum):
    idle = "idle"
    busy = "busy"


class SingleFlightGate:
    """Admit at most one operation at a time, rejecting the rest.

    Callers that arrive while an operation is running get Throttled right
    away; nothing is queued. The permit is released on every exit path.
    """

    def __init__(self, name: str):
        self.name = name
        self._permit = asyncio.Semaphore(1)

    @property
    def state(self) -> GateState:
        return GateState.busy if self._permit.locked() else GateState.idle

    @asynccontextmanager
    async def admit(self) -> AsyncIterator[None]:
        if self._permit.locked():
            raise Throttled(f"{self.name} already in progress, try again shortly")
        # Free permit: acquire() returns without suspending, so no one can slip in.
        await self._permit.acquire()
        try:
            yield
        finally:
            self._permit.release()
