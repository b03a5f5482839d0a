"""Application delivery – RetryAwareConsumer.

Drives every delivery through ``RECEIVED -> PROCESSING -> {SUCCEEDED,
RETRYING, EXHAUSTED}``.  A failed attempt never blocks the consumer: the
next attempt is handed to a :class:`RetryScheduler` and the delivery stays
unacknowledged until the message either succeeds or reaches the dead-letter
topic.  A failed acknowledgement is logged and left to redelivery.  Once the
record is committed the message can no longer be dead-lettered: a cache step
that keeps failing is given up and the message still succeeds.
"""
from __future__ import annotations

import functools
import logging
import time
from collections.abc import Awaitable, Callable

from streamflow.application.delivery.dead_letter import DeadLetterRouter
from streamflow.application.delivery.lifecycle import MessageLifecycle, ProcessingState
from streamflow.application.delivery.recorder import NotificationRecorder
from streamflow.kernel.errors import ExhaustionFailure, describe_error
from streamflow.kernel.messaging import Delivery, MessageSerializer, MessageSource
from streamflow.notifications import NotificationRequest, NotificationSerializer
from streamflow.observability.metrics import NotificationMetrics
from streamflow.resilience.retry import AsyncioRetryScheduler, RetryPolicy, RetryScheduler

logger = logging.getLogger(__name__)

NotificationHandler = Callable[[NotificationRequest], Awaitable[None]]


class RetryAwareConsumer:
    """Processes notification deliveries with bounded, timer-driven retries.

    Parameters
    ----------
    recorder:
        Commits the record and updates the recent cache on success.
    router:
        Receives the payload once the retry budget is spent.
    policy:
        Attempt budget and backoff; :meth:`RetryPolicy.default` when omitted.
    scheduler:
        Runs deferred attempts; an :class:`AsyncioRetryScheduler` when omitted.
    handler:
        Optional channel delivery step run before persistence.  Whatever it
        raises counts as a failed attempt.
    timer:
        Monotonic seconds source for the processing-time histogram.
    """

    def __init__(
        self,
        recorder: NotificationRecorder,
        router: DeadLetterRouter,
        *,
        policy: RetryPolicy | None = None,
        scheduler: RetryScheduler | None = None,
        serializer: MessageSerializer[NotificationRequest] | None = None,
        metrics: NotificationMetrics | None = None,
        handler: NotificationHandler | None = None,
        timer: Callable[[], float] = time.perf_counter,
    ) -> None:
        self._recorder = recorder
        self._router = router
        self._policy = policy or RetryPolicy.default()
        self._scheduler = scheduler or AsyncioRetryScheduler()
        self._serializer = serializer or NotificationSerializer()
        self._metrics = metrics or NotificationMetrics()
        self._handler = handler
        self._timer = timer
        self._in_flight: set[MessageLifecycle] = set()
        self._waiting = 0

    @property
    def policy(self) -> RetryPolicy:
        return self._policy

    @property
    def scheduler(self) -> RetryScheduler:
        return self._scheduler

    @property
    def in_flight(self) -> int:
        """Lifecycles that have not reached a terminal state yet."""
        return len(self._in_flight)

    async def run(self, source: MessageSource) -> None:
        """Consume *source* until it is exhausted or stopped."""
        async for delivery in source:
            await self.handle(delivery)

    async def handle(self, delivery: Delivery) -> MessageLifecycle:
        """Run the first attempt of *delivery* and return its lifecycle.

        When the attempt fails and a retry is due, the returned lifecycle is
        ``RETRYING``; ``await lifecycle.wait()`` follows it to the end.
        """
        lifecycle = MessageLifecycle(delivery=delivery, started_at=self._timer())
        if delivery.redelivered:
            logger.info(
                "consumer.redelivered id=%s delivery_count=%d", delivery.message.id, delivery.delivery_count
            )
        self._in_flight.add(lifecycle)
        await self._attempt(lifecycle)
        return lifecycle

    async def close(self) -> int:
        """Close the scheduler and return how many waiting retries were dropped.

        Their deliveries stay unacknowledged and come back as redeliveries.
        """
        await self._scheduler.close()
        dropped, self._waiting = self._waiting, 0
        if dropped:
            self._metrics.retries_dropped(dropped)
        self._in_flight = {lc for lc in self._in_flight if lc.state is not ProcessingState.RETRYING}
        return dropped

    async def _resume(self, lifecycle: MessageLifecycle) -> None:
        self._waiting -= 1
        self._metrics.retry_resumed()
        await self._attempt(lifecycle)

    async def _attempt(self, lifecycle: MessageLifecycle) -> None:
        lifecycle.transition(ProcessingState.PROCESSING)
        lifecycle.attempts += 1
        delivery = lifecycle.delivery
        try:
            if lifecycle.record is None:
                request = self._serializer.deserialize(delivery.payload)
                if self._handler is not None:
                    await self._handler(request)
                lifecycle.record = await self._recorder.persist(request)
            await self._recorder.cache(delivery.payload.decode("utf-8", errors="replace"))
        except Exception as exc:
            await self._on_failure(lifecycle, exc)
            return
        await self._on_success(lifecycle)

    async def _on_success(self, lifecycle: MessageLifecycle) -> None:
        lifecycle.transition(ProcessingState.SUCCEEDED)
        self._in_flight.discard(lifecycle)
        await self._ack(lifecycle)
        elapsed = self._timer() - lifecycle.started_at
        self._metrics.increment_processed()
        self._metrics.record_processing_time(elapsed)
        record_id = lifecycle.record.id if lifecycle.record is not None else None
        logger.info(
            "consumer.succeeded id=%s record_id=%s attempts=%d elapsed_ms=%.1f",
            lifecycle.message_id,
            record_id,
            lifecycle.attempts,
            elapsed * 1000.0,
        )

    async def _on_failure(self, lifecycle: MessageLifecycle, exc: Exception) -> None:
        lifecycle.last_error = exc
        self._metrics.increment_failed(type(exc).__name__)

        if self._policy.should_retry(exc, lifecycle.attempts):
            delay = self._policy.delay_for(lifecycle.attempts)
            lifecycle.transition(ProcessingState.RETRYING)
            self._metrics.retry_scheduled()
            logger.warning(
                "consumer.retry_scheduled id=%s attempt=%d delay=%.3f error=%s",
                lifecycle.message_id,
                lifecycle.attempts,
                delay,
                describe_error(exc),
            )
            self._scheduler.schedule(delay, functools.partial(self._resume, lifecycle))
            self._waiting += 1
            return

        if lifecycle.record is not None:
            # Already committed: the recent cache may lag the store, the record stays.
            logger.error(
                "consumer.cache_skipped id=%s record_id=%s attempts=%d error=%s",
                lifecycle.message_id,
                lifecycle.record.id,
                lifecycle.attempts,
                describe_error(exc),
            )
            await self._on_success(lifecycle)
            return

        await self._exhaust(lifecycle, exc)

    async def _exhaust(self, lifecycle: MessageLifecycle, exc: Exception) -> None:
        failure = ExhaustionFailure(lifecycle.message_id, lifecycle.attempts, reason=describe_error(exc), cause=exc)
        lifecycle.failure = failure
        lifecycle.transition(ProcessingState.EXHAUSTED)
        self._in_flight.discard(lifecycle)
        delivery = lifecycle.delivery
        logger.error("consumer.exhausted id=%s attempts=%d reason=%s", failure.message_id, failure.attempts, failure.reason)
        try:
            lifecycle.dead_letter = await self._router.route(
                delivery.payload,
                failure.reason,
                attempts=failure.attempts,
                error_type=type(exc).__name__,
                message_id=failure.message_id,
                source_topic=delivery.message.topic,
            )
        except Exception:
            # Unacknowledged: the queue redelivers the message.
            logger.exception("consumer.dead_letter_failed id=%s", failure.message_id)
            return
        await self._ack(lifecycle)

    async def _ack(self, lifecycle: MessageLifecycle) -> None:
        try:
            await lifecycle.delivery.ack()
        except Exception:
            # Left unacknowledged: the queue redelivers the message.
            logger.exception("consumer.ack_failed id=%s state=%s", lifecycle.message_id, lifecycle.state.value)


__all__ = ["NotificationHandler", "RetryAwareConsumer"]
