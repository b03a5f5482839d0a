"""MongoDB adapter – notification log store."""
from streamflow.adapters.mongodb.store import MongoNotificationStore

__all__ = ["MongoNotificationStore"]
