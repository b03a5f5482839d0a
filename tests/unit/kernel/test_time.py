"""Unit tests for kernel time."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from streamflow.kernel.time import FrozenClock, SystemClock, TickingClock, utc_now


class TestSystemClock:
    def test_now_is_aware_utc(self) -> None:
        assert SystemClock().now().tzinfo == UTC

    def test_utc_now(self) -> None:
        before = datetime.now(UTC)
        assert utc_now() >= before


class TestFrozenClock:
    def test_returns_fixed(self) -> None:
        fixed = datetime(2026, 1, 1, tzinfo=UTC)
        clock = FrozenClock(fixed)
        assert clock.now() == fixed
        assert clock.now() == fixed

    def test_advance(self) -> None:
        clock = FrozenClock(datetime(2026, 1, 1, tzinfo=UTC))
        clock.advance(minutes=5)
        assert clock.now() == datetime(2026, 1, 1, 0, 5, tzinfo=UTC)


class TestTickingClock:
    def test_moves_after_each_read(self) -> None:
        start = datetime(2026, 1, 1, tzinfo=UTC)
        clock = TickingClock(start, step=timedelta(seconds=2))
        assert clock.now() == start
        assert clock.now() == start + timedelta(seconds=2)
        assert clock.now() == start + timedelta(seconds=4)
