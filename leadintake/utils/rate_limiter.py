from typing import Optional
from redis import Redis, ConnectionPool
from leadintake.core.config import settings

# Simple Redis-based fixed-window rate limiter
_pool: Optional[ConnectionPool] = None
_client: Optional[Redis] = None


def get_client() -> Redis:
    global _pool, _client
    if _client is None:
        _pool = ConnectionPool.from_url(
            settings.REDIS_URL,
            decode_responses=True,
            socket_connect_timeout=1,
            socket_timeout=1,
        )
        _client = Redis(connection_pool=_pool)
    return _client


def allow(key: str, limit: int, window_seconds: int) -> bool:
    """Return True if action under key is allowed within window, else False.

    Uses INCR + EXPIRE (nx) so the window starts at the first hit.
    """
    r = get_client()
    with r.pipeline() as pipe:
        pipe.incr(key, 1)
        pipe.expire(key, window_seconds, nx=True)
        count, _ = pipe.execute()
    return int(count) <= limit


def allow_for_client(client_id: str, limit: int, window_seconds: int) -> bool:
    key = f"rl:client:{client_id or 'unknown'}"
    return allow(key, limit, window_seconds)
