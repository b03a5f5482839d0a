"""Kafka adapter – producer, consumer source and offset tracking."""
from streamflow.adapters.kafka.consumer import KafkaDelivery, KafkaMessageSource
from streamflow.adapters.kafka.offsets import OffsetTracker
from streamflow.adapters.kafka.producer import KafkaProducer

__all__ = ["KafkaDelivery", "KafkaMessageSource", "KafkaProducer", "OffsetTracker"]
