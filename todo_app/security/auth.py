"""
JWT 鉴权模块：Token 签发 / 校验 / 黑名单检查

任何 Todo 过程都依赖 get_current_user，鉴权失败在进入服务层之前就被拒绝。
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt
import redis.asyncio as aioredis
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from todo_app.cache.redis_client import get_redis, is_token_revoked
from todo_app.config import get_settings
from todo_app.observability.context import bind_user
from todo_app.observability.metrics import AUTH_EVENT_TOTAL
from todo_app.todo.errors import AuthError

settings = get_settings()
# auto_error=False：缺少 Authorization 头时由下面统一抛 AuthError（401）
bearer_scheme = HTTPBearer(auto_error=False)


@dataclass
class AuthenticatedUser:
    """鉴权后的用户上下文，贯穿整个请求生命周期"""

    id: str
    username: str = ""
    name: str = ""

    def as_session(self) -> dict:
        """会话视图：{"user": {"id", "name", "username"}}"""
        return {"user": {"id": self.id, "name": self.name, "username": self.username}}


def create_access_token(*, sub: str, username: str, name: str | None = None) -> str:
    """签发 access_token"""
    now = datetime.now(timezone.utc)
    payload = {
        "sub": sub,
        "jti": str(uuid.uuid4()),
        "username": username,
        "name": name or "",
        "token_type": "access",
        "iat": now,
        "exp": now + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def create_refresh_token(*, sub: str) -> str:
    """签发 refresh_token"""
    now = datetime.now(timezone.utc)
    payload = {
        "sub": sub,
        "jti": str(uuid.uuid4()),
        "token_type": "refresh",
        "iat": now,
        "exp": now + timedelta(minutes=settings.REFRESH_TOKEN_EXPIRE_MINUTES),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str, *, expected_type: str) -> dict:
    """解码并校验 Token 类型，失败统一抛 AuthError"""
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except jwt.ExpiredSignatureError as e:
        raise AuthError("Token 已过期", cause=e) from e
    except jwt.InvalidTokenError as e:
        raise AuthError("无效 Token", cause=e) from e

    if payload.get("token_type") != expected_type:
        raise AuthError("Token 类型错误")
    return payload


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    redis: aioredis.Redis = Depends(get_redis),
) -> AuthenticatedUser:
    """FastAPI 依赖注入：校验 JWT 并返回用户上下文"""
    if credentials is None:
        AUTH_EVENT_TOTAL.labels(event="rejected").inc()
        raise AuthError("未登录")

    # 1. 解码 JWT
    try:
        payload = decode_token(credentials.credentials, expected_type="access")
    except AuthError:
        AUTH_EVENT_TOTAL.labels(event="rejected").inc()
        raise

    # 2. 检查黑名单（已注销的 Token）
    jti = payload.get("jti")
    if jti and await is_token_revoked(redis, jti):
        AUTH_EVENT_TOTAL.labels(event="rejected").inc()
        raise AuthError("Token 已注销")

    # 3. 构造用户上下文
    user = AuthenticatedUser(
        id=payload["sub"],
        username=payload.get("username", ""),
        name=payload.get("name", ""),
    )
    bind_user(user.id)
    return user
