"""Observability – structured logging setup."""
from streamflow.observability.logging.factory import JsonLoggerFactory, get_logger

__all__ = ["JsonLoggerFactory", "get_logger"]
