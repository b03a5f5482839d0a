"""Config settings – NotificationSettings."""
from __future__ import annotations

import dataclasses

from streamflow.config.settings.base import Settings
from streamflow.config.validation import InvalidSettingValueError
from streamflow.resilience.retry import ExponentialBackoff, RetryPolicy


@dataclasses.dataclass
class NotificationSettings(Settings):
    """Every knob of the delivery pipeline, read from ``STREAMFLOW_*``."""

    _prefix = "STREAMFLOW"
    _secret_fields = frozenset({"mongo_url", "redis_url"})

    kafka_bootstrap_servers: str = "localhost:9092"
    main_topic: str = "user-notifications"
    dlq_topic: str = "notifications-dlq"
    consumer_group: str = "notification-group"
    dlq_consumer_group: str = "dlq-group"

    redis_url: str = "redis://localhost:6379/0"
    recent_notifications_key: str = "recent_notifications"
    recent_notifications_limit: int = 10

    mongo_url: str = "mongodb://localhost:27017"
    mongo_database: str = "streamflow"
    mongo_collection: str = "logs"

    retry_max_attempts: int = 3
    retry_base_delay_ms: int = 1000
    retry_multiplier: float = 2.0
    retry_max_delay_ms: int = 30000
    dead_letter_malformed: bool = False

    dlq_review_buffer: int = 1000
    log_level: str = "INFO"
    log_json: bool = True

    def _validate(self) -> None:
        if self.recent_notifications_limit < 1:
            raise InvalidSettingValueError(
                "recent_notifications_limit", self.recent_notifications_limit, "must be >= 1"
            )
        if self.retry_max_attempts < 1:
            raise InvalidSettingValueError("retry_max_attempts", self.retry_max_attempts, "must be >= 1")
        if self.retry_multiplier < 1:
            raise InvalidSettingValueError("retry_multiplier", self.retry_multiplier, "must be >= 1")
        if self.retry_base_delay_ms < 0:
            raise InvalidSettingValueError("retry_base_delay_ms", self.retry_base_delay_ms, "must be >= 0")
        if self.retry_max_delay_ms < self.retry_base_delay_ms:
            raise InvalidSettingValueError(
                "retry_max_delay_ms", self.retry_max_delay_ms, "must be >= retry_base_delay_ms"
            )
        if self.dlq_review_buffer < 1:
            raise InvalidSettingValueError("dlq_review_buffer", self.dlq_review_buffer, "must be >= 1")
        if self.main_topic == self.dlq_topic:
            raise InvalidSettingValueError("dlq_topic", self.dlq_topic, "must differ from main_topic")

    def retry_policy(self) -> RetryPolicy:
        """Build the consumer's retry policy from the ``retry_*`` fields."""
        backoff = ExponentialBackoff(
            base_delay=self.retry_base_delay_ms / 1000.0,
            multiplier=self.retry_multiplier,
            max_delay=self.retry_max_delay_ms / 1000.0,
        )
        default = RetryPolicy.default(dead_letter_malformed=self.dead_letter_malformed)
        return RetryPolicy(
            max_attempts=self.retry_max_attempts,
            backoff=backoff,
            non_retryable_exceptions=default.non_retryable_exceptions,
        )


__all__ = ["NotificationSettings"]
