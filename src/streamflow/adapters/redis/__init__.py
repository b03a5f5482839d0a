"""Redis adapter – bounded recent-notifications list."""
from streamflow.adapters.redis.recent_cache import RedisRecentCache

__all__ = ["RedisRecentCache"]
