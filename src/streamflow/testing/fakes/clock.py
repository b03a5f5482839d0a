"""Testing fakes – FakeClock factory."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta

from streamflow.kernel.time import FrozenClock, TickingClock

EPOCH = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


def FakeClock(step: timedelta | None = None) -> FrozenClock:
    """Return a clock pinned to 2026-01-01 12:00 UTC.

    With *step* the clock moves forward by that much after every read, so
    records written one after another get increasing timestamps.
    """
    if step is not None:
        return TickingClock(EPOCH, step)
    return FrozenClock(EPOCH)


__all__ = ["EPOCH", "FakeClock"]
