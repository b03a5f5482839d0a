"""Testing fakes – in-memory doubles for the pipeline's ports."""
from streamflow.kernel.time import FrozenClock, TickingClock
from streamflow.testing.fakes.cache import InMemoryRecentCache
from streamflow.testing.fakes.clock import EPOCH, FakeClock
from streamflow.testing.fakes.metrics import FakeMetricsRegistry
from streamflow.testing.fakes.queue import InMemoryMessageSource, InMemoryQueue
from streamflow.testing.fakes.scheduler import ManualRetryScheduler
from streamflow.testing.fakes.store import InMemoryNotificationStore

__all__ = [
    "EPOCH",
    "FakeClock",
    "FakeMetricsRegistry",
    "FrozenClock",
    "InMemoryMessageSource",
    "InMemoryNotificationStore",
    "InMemoryQueue",
    "InMemoryRecentCache",
    "ManualRetryScheduler",
    "TickingClock",
]
