"""Application delivery – per-message processing state."""
from __future__ import annotations

import asyncio
import dataclasses
from enum import Enum

from streamflow.kernel.errors import ExhaustionFailure
from streamflow.kernel.messaging import DeadLetterEntry, Delivery
from streamflow.notifications import NotificationRecord


class ProcessingState(str, Enum):
    RECEIVED = "RECEIVED"
    PROCESSING = "PROCESSING"
    RETRYING = "RETRYING"
    SUCCEEDED = "SUCCEEDED"
    EXHAUSTED = "EXHAUSTED"


_TERMINAL = frozenset({ProcessingState.SUCCEEDED, ProcessingState.EXHAUSTED})

_TRANSITIONS: dict[ProcessingState, frozenset[ProcessingState]] = {
    ProcessingState.RECEIVED: frozenset({ProcessingState.PROCESSING}),
    ProcessingState.PROCESSING: frozenset(
        {ProcessingState.SUCCEEDED, ProcessingState.RETRYING, ProcessingState.EXHAUSTED}
    ),
    ProcessingState.RETRYING: frozenset({ProcessingState.PROCESSING}),
    ProcessingState.SUCCEEDED: frozenset(),
    ProcessingState.EXHAUSTED: frozenset(),
}


@dataclasses.dataclass(eq=False)
class MessageLifecycle:
    """Tracks one delivery from arrival to SUCCEEDED or EXHAUSTED.

    ``attempts`` counts started attempts.  ``record`` is set once the store
    committed the notification and is reused by later attempts.  ``dead_letter``
    stays ``None`` on an EXHAUSTED lifecycle whose hand-off failed; its
    delivery is then left unacknowledged.
    """

    delivery: Delivery
    started_at: float
    state: ProcessingState = ProcessingState.RECEIVED
    attempts: int = 0
    last_error: BaseException | None = None
    record: NotificationRecord | None = None
    failure: ExhaustionFailure | None = None
    dead_letter: DeadLetterEntry | None = None
    history: list[ProcessingState] = dataclasses.field(default_factory=lambda: [ProcessingState.RECEIVED])
    _done: asyncio.Event = dataclasses.field(default_factory=asyncio.Event, repr=False)

    @property
    def message_id(self) -> str:
        return self.delivery.message.id

    @property
    def is_terminal(self) -> bool:
        return self.state in _TERMINAL

    def transition(self, state: ProcessingState) -> None:
        if state not in _TRANSITIONS[self.state]:
            raise RuntimeError(f"illegal transition {self.state.value} -> {state.value} for {self.message_id}")
        self.state = state
        self.history.append(state)
        if state in _TERMINAL:
            self._done.set()

    async def wait(self) -> ProcessingState:
        """Block until the lifecycle reaches a terminal state."""
        await self._done.wait()
        return self.state


__all__ = ["MessageLifecycle", "ProcessingState"]
