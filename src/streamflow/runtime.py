"""Runtime – wiring of the delivery pipeline.

:class:`StreamflowRuntime` owns every long-lived object of a process: the
queue clients, store, cache, retry scheduler, main consumer, dead-letter sink
and the :class:`NotificationService` facade handed to the HTTP layer.
"""
from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from streamflow.application.delivery import (
    DeadLetterRouter,
    DeadLetterSink,
    NotificationHandler,
    NotificationIntake,
    NotificationRecorder,
    RetryAwareConsumer,
)
from streamflow.application.queries import NotificationHistory, StatsAggregator
from streamflow.application.service import NotificationService
from streamflow.config.settings import NotificationSettings
from streamflow.kernel.messaging import MessageBus, MessageSource
from streamflow.kernel.time import Clock, SystemClock
from streamflow.notifications import NotificationSerializer, NotificationStore, RecentCache
from streamflow.observability.logging import JsonLoggerFactory
from streamflow.observability.metrics import Metrics, NotificationMetrics
from streamflow.resilience.retry import AsyncioRetryScheduler, RetryScheduler

logger = logging.getLogger(__name__)

Hook = Callable[[], Awaitable[Any]]


class StreamflowRuntime:
    """Builds the object graph once and runs its two consumer loops."""

    def __init__(
        self,
        settings: NotificationSettings,
        *,
        bus: MessageBus,
        main_source: MessageSource,
        dlq_source: MessageSource,
        store: NotificationStore,
        cache: RecentCache,
        metrics: Metrics | None = None,
        scheduler: RetryScheduler | None = None,
        clock: Clock | None = None,
        handler: NotificationHandler | None = None,
        on_start: list[Hook] | None = None,
        on_stop: list[Hook] | None = None,
        readiness_checks: list[Hook] | None = None,
    ) -> None:
        self.settings = settings
        self.bus = bus
        self.main_source = main_source
        self.dlq_source = dlq_source
        self.store = store
        self.cache = cache
        self.scheduler = scheduler or AsyncioRetryScheduler()
        clock = clock or SystemClock()
        serializer = NotificationSerializer()

        self.metrics = NotificationMetrics(metrics)
        self.intake = NotificationIntake(
            bus, settings.main_topic, serializer=serializer, metrics=self.metrics, clock=clock
        )
        self.recorder = NotificationRecorder(
            store, cache, recent_limit=settings.recent_notifications_limit, clock=clock
        )
        self.router = DeadLetterRouter(bus, settings.dlq_topic, metrics=self.metrics, clock=clock)
        self.consumer = RetryAwareConsumer(
            self.recorder,
            self.router,
            policy=settings.retry_policy(),
            scheduler=self.scheduler,
            serializer=serializer,
            metrics=self.metrics,
            handler=handler,
        )
        self.sink = DeadLetterSink(dlq_source, buffer=settings.dlq_review_buffer)
        self.service = NotificationService(
            self.intake, NotificationHistory(store, cache), StatsAggregator(store)
        )

        self._on_start = list(on_start or [])
        self._on_stop = list(on_stop or [])
        self.readiness_checks = list(readiness_checks or [])
        self._tasks: list[asyncio.Task[None]] = []

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def from_settings(
        cls,
        settings: NotificationSettings,
        *,
        metrics: Metrics | None = None,
        handler: NotificationHandler | None = None,
        configure_logging: bool = True,
    ) -> "StreamflowRuntime":
        """Kafka + MongoDB + Redis graph, Prometheus metrics unless *metrics* is given."""
        from streamflow.adapters.kafka import KafkaMessageSource, KafkaProducer
        from streamflow.adapters.mongodb import MongoNotificationStore
        from streamflow.adapters.redis import RedisRecentCache

        if configure_logging:
            JsonLoggerFactory.configure(settings.log_level, json=settings.log_json)
        logger.info("runtime.configured settings=%s", settings.redacted())
        if metrics is None:
            from streamflow.adapters.prometheus import PrometheusMetrics

            metrics = PrometheusMetrics()

        producer = KafkaProducer(settings.kafka_bootstrap_servers)
        main_source = KafkaMessageSource(
            settings.kafka_bootstrap_servers, settings.main_topic, settings.consumer_group
        )
        dlq_source = KafkaMessageSource(
            settings.kafka_bootstrap_servers, settings.dlq_topic, settings.dlq_consumer_group
        )
        store = MongoNotificationStore.from_url(
            settings.mongo_url, settings.mongo_database, settings.mongo_collection
        )
        cache = RedisRecentCache(settings.redis_url, key=settings.recent_notifications_key)

        return cls(
            settings,
            bus=producer,
            main_source=main_source,
            dlq_source=dlq_source,
            store=store,
            cache=cache,
            metrics=metrics,
            handler=handler,
            on_start=[store.create_indexes, producer.start],
            on_stop=[producer.stop, cache.close],
            readiness_checks=[store.ping, cache.ping],
        )

    @classmethod
    def in_memory(
        cls,
        settings: NotificationSettings | None = None,
        *,
        metrics: Metrics | None = None,
        scheduler: RetryScheduler | None = None,
        clock: Clock | None = None,
        handler: NotificationHandler | None = None,
    ) -> "StreamflowRuntime":
        """Same graph over the in-memory fakes, for local runs and tests."""
        from streamflow.testing.fakes import InMemoryNotificationStore, InMemoryQueue, InMemoryRecentCache

        settings = settings or NotificationSettings()
        queue = InMemoryQueue()
        return cls(
            settings,
            bus=queue,
            main_source=queue.source(settings.main_topic, settings.consumer_group, follow=True),
            dlq_source=queue.source(settings.dlq_topic, settings.dlq_consumer_group, follow=True),
            store=InMemoryNotificationStore(),
            cache=InMemoryRecentCache(),
            metrics=metrics,
            scheduler=scheduler,
            clock=clock,
            handler=handler,
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def running(self) -> bool:
        return any(not t.done() for t in self._tasks)

    async def start(self) -> None:
        if self._tasks:
            raise RuntimeError("runtime already started")
        for hook in self._on_start:
            await hook()
        await self.main_source.start()
        await self.dlq_source.start()
        self._tasks = [
            asyncio.create_task(self.consumer.run(self.main_source), name="streamflow-consumer"),
            asyncio.create_task(self.sink.run(), name="streamflow-dlq-sink"),
        ]
        for task in self._tasks:
            task.add_done_callback(self._on_task_done)
        logger.info(
            "runtime.started main_topic=%s dlq_topic=%s", self.settings.main_topic, self.settings.dlq_topic
        )

    async def stop(self) -> None:
        await self.main_source.stop()
        await self.dlq_source.stop()
        for task in self._tasks:
            task.cancel()
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
        self._tasks = []
        dropped = await self.consumer.close()
        for hook in self._on_stop:
            await hook()
        logger.info("runtime.stopped in_flight=%d retries_dropped=%d", self.consumer.in_flight, dropped)

    async def __aenter__(self) -> "StreamflowRuntime":
        await self.start()
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.stop()

    @staticmethod
    def _on_task_done(task: asyncio.Task[None]) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("runtime.task_failed task=%s error=%r", task.get_name(), exc, exc_info=exc)


__all__ = ["StreamflowRuntime"]
