"""Adapters – Kafka, MongoDB, Redis, Prometheus and FastAPI bindings of the ports."""
