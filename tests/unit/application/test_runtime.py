"""Unit tests for StreamflowRuntime wired over the in-memory fakes."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from streamflow.application.delivery import ProcessingState
from streamflow.config.settings import NotificationSettings
from streamflow.kernel.errors import TransientProcessingError
from streamflow.notifications import NotificationRequest, NotificationStats, NotificationType
from streamflow.observability.metrics import DLQ_TOTAL, PROCESSED_TOTAL, RETRIES_PENDING, SENT_TOTAL
from streamflow.runtime import StreamflowRuntime
from streamflow.testing.fakes import FakeMetricsRegistry

# Millisecond backoff keeps the real asyncio scheduler fast.
_FAST = NotificationSettings(retry_base_delay_ms=1, retry_max_delay_ms=5)


async def _settle(runtime: StreamflowRuntime, *, processed: int, dead: int = 0, timeout: float = 5.0) -> None:
    async def wait() -> None:
        while (
            await runtime.store.count_all() < processed
            or len(runtime.sink.entries) < dead
            or runtime.consumer.in_flight
        ):
            await asyncio.sleep(0.005)

    await asyncio.wait_for(wait(), timeout)


class TestInMemoryRuntime:
    def test_end_to_end_success(self) -> None:
        registry = FakeMetricsRegistry()

        async def run() -> tuple[NotificationStats, list[str]]:
            runtime = StreamflowRuntime.in_memory(_FAST, metrics=registry)
            async with runtime:
                for t in ("INFO", "INFO", "WARN", "ERROR"):
                    await runtime.service.submit_raw({"message": f"{t} event", "type": t})
                await _settle(runtime, processed=4)
                return await runtime.service.stats(), await runtime.service.recent()

        stats, recent = asyncio.run(run())
        assert stats == NotificationStats(4, 2, 1, 1)
        assert len(recent) == 4
        registry.assert_counter_total(SENT_TOTAL, 4)
        registry.assert_counter_total(PROCESSED_TOTAL, 4)

    def test_exhausted_message_reaches_sink(self) -> None:
        registry = FakeMetricsRegistry()

        async def always_fail(request: NotificationRequest) -> None:
            raise TransientProcessingError("provider down")

        async def run() -> tuple[int, Any]:
            runtime = StreamflowRuntime.in_memory(_FAST, metrics=registry, handler=always_fail)
            async with runtime:
                await runtime.service.submit(NotificationRequest("doomed", NotificationType.ERROR))
                await _settle(runtime, processed=0, dead=1)
                return await runtime.store.count_all(), runtime.sink.entries

        count, entries = asyncio.run(run())
        assert count == 0
        (entry,) = entries
        assert entry.attempts == 3
        assert entry.reason == "provider down"
        registry.assert_counter_total(DLQ_TOTAL, 1)

    def test_transient_failure_recovers(self) -> None:
        calls = {"n": 0}

        async def flaky(request: NotificationRequest) -> None:
            calls["n"] += 1
            if calls["n"] == 1:
                raise TransientProcessingError("blip")

        async def run() -> tuple[int, int]:
            runtime = StreamflowRuntime.in_memory(_FAST, handler=flaky)
            async with runtime:
                await runtime.service.submit(NotificationRequest("hello"))
                await _settle(runtime, processed=1)
                return await runtime.store.count_all(), len(runtime.sink.entries)

        assert asyncio.run(run()) == (1, 0)
        assert calls["n"] == 2

    def test_start_twice_rejected(self) -> None:
        async def run() -> None:
            runtime = StreamflowRuntime.in_memory(_FAST)
            async with runtime:
                assert runtime.running is True
                with pytest.raises(RuntimeError):
                    await runtime.start()
            assert runtime.running is False

        asyncio.run(run())

    def test_wiring_uses_settings(self) -> None:
        settings = NotificationSettings(retry_max_attempts=5, recent_notifications_limit=3, dlq_review_buffer=7)
        runtime = StreamflowRuntime.in_memory(settings)
        assert runtime.consumer.policy.max_attempts == 5
        assert runtime.recorder.recent_limit == 3
        assert runtime.router.topic == "notifications-dlq"
        assert ProcessingState.RECEIVED.value == "RECEIVED"

    def test_stop_drops_waiting_retries_from_the_gauge(self) -> None:
        registry = FakeMetricsRegistry()
        slow = NotificationSettings(retry_base_delay_ms=60000, retry_max_delay_ms=60000)

        async def always_fail(request: NotificationRequest) -> None:
            raise TransientProcessingError("provider down")

        async def run() -> float:
            runtime = StreamflowRuntime.in_memory(slow, metrics=registry, handler=always_fail)
            async with runtime:
                await runtime.service.submit(NotificationRequest("later"))

                async def scheduled() -> None:
                    while registry.gauge_value(RETRIES_PENDING) < 1:
                        await asyncio.sleep(0.005)

                await asyncio.wait_for(scheduled(), 5.0)
            return registry.gauge_value(RETRIES_PENDING)

        assert asyncio.run(run()) == 0
