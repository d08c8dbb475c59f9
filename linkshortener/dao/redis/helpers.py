import functools
import redis
from typing import TypeVar, Any
from collections.abc import Callable

from linkshortener.dao.exceptions import DataStoreError


__all__ = []

F = TypeVar('F', bound=Callable[..., Any])

# Redis failures that mean "the server can't be reached", as opposed to command errors
REDIS_CONNECTIVITY_ERRORS = (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError)


def handle_redis_connection_error[F](method: F) -> F:
    """Wrap Redis-interacting DAO methods to handle connection errors

    The raised exception type is taken from the DAO's `connection_error`
    attribute, and the Redis errors it catches from `connectivity_errors`, so
    the same decorator serves the mapping store (DataStoreError on connection
    and timeout errors) and the resolution cache (CacheUnavailableError on any
    Redis error, including command errors such as READONLY or OOM).

    Args:
        method (Callable[..., Any]):
            DAO method performing Redis operations which may raise
            redis.exceptions.ConnectionError or redis.exceptions.TimeoutError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises `self.connection_error` (DataStoreError
            by default) on any of `self.connectivity_errors`
            (REDIS_CONNECTIVITY_ERRORS by default).

    Example:
        >>> @handle_redis_connection_error
        ... def find_by_shortcode(self, shortcode):
        ...     return self.redis.hgetall(shortcode)
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        errors = getattr(self, 'connectivity_errors', REDIS_CONNECTIVITY_ERRORS)
        try:
            return method(self, *args, **kwargs)
        except errors as e:
            error_cls = getattr(self, 'connection_error', DataStoreError)
            info = self.redis.connection_pool.connection_kwargs
            redis_host = info.get('host')
            redis_port = info.get('port')
            redis_db = info.get('db')
            if isinstance(e, REDIS_CONNECTIVITY_ERRORS):
                raise error_cls(f"Can't connect to Redis at {redis_host}:{redis_port}/{redis_db}.") from e
            raise error_cls(f'Redis command failed at {redis_host}:{redis_port}/{redis_db}: {e}') from e

    return wrapper
