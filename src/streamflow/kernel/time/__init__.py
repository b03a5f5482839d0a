"""Kernel time – Clock port + implementations."""
from streamflow.kernel.time.clock import Clock, FrozenClock, SystemClock, TickingClock, utc_now

__all__ = ["Clock", "FrozenClock", "SystemClock", "TickingClock", "utc_now"]
