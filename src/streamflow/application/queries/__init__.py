"""Application queries – history and stats read paths."""
from streamflow.application.queries.history import DEFAULT_PAGE_SIZE, DEFAULT_RECENT, NotificationHistory
from streamflow.application.queries.stats import StatsAggregator

__all__ = ["DEFAULT_PAGE_SIZE", "DEFAULT_RECENT", "NotificationHistory", "StatsAggregator"]
