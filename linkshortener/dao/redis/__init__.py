from linkshortener.dao.redis.redis_key_schema import RedisKeySchema
from linkshortener.dao.redis.mixins import RedisClientMixin
from linkshortener.dao.redis.url_mapping_redis_dao import UrlMappingRedisDAO


__all__ = [
    'RedisKeySchema',
    'RedisClientMixin',
    'UrlMappingRedisDAO',
]
