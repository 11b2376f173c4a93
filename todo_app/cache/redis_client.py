"""
Redis 客户端：连接池 + Key 统一管理 + FastAPI 依赖注入
"""

import redis.asyncio as aioredis

from todo_app.config import get_settings


class RedisKeys:
    """
    Redis Key 统一管理，避免散弹式硬编码
    命名规范：{业务域}:{资源类型}:{标识}
    """

    # ── JWT 黑名单 ──
    @staticmethod
    def token_blacklist(jti: str) -> str:
        """JWT 注销黑名单 (TTL = token 剩余有效期)"""
        return f"bl:token:{jti}"

settings = get_settings()

redis_pool = aioredis.ConnectionPool.from_url(
    settings.REDIS_URL,
    max_connections=settings.REDIS_MAX_CONNECTIONS,
    decode_responses=True,
    socket_timeout=5,
    socket_connect_timeout=5,
    retry_on_timeout=True,
)

redis_client = aioredis.Redis(connection_pool=redis_pool)


async def get_redis() -> aioredis.Redis:
    """FastAPI 依赖注入：获取 Redis 客户端"""
    return redis_client


async def revoke_token(redis: aioredis.Redis, jti: str, ttl_seconds: int) -> None:
    """Token 拉黑，TTL 到期后 Token 本身也已过期，Key 自动清理"""
    await redis.setex(RedisKeys.token_blacklist(jti), max(ttl_seconds, 1), "1")


async def is_token_revoked(redis: aioredis.Redis, jti: str) -> bool:
    return bool(await redis.exists(RedisKeys.token_blacklist(jti)))
