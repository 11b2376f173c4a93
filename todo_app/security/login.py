"""
登录接口：注册 + 用户名密码登录 + Token 签发 / 刷新 / 注销 + 当前会话
"""

from datetime import datetime, timezone

import bcrypt
import redis.asyncio as aioredis
import structlog
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from todo_app.cache.redis_client import get_redis, revoke_token
from todo_app.db.engine import get_db
from todo_app.db.models.user import User
from todo_app.observability.metrics import AUTH_EVENT_TOTAL
from todo_app.security.auth import (
    AuthenticatedUser,
    bearer_scheme,
    create_access_token,
    create_refresh_token,
    decode_token,
    get_current_user,
)
from todo_app.todo.errors import AuthError

router = APIRouter(prefix="/auth", tags=["认证"])
log = structlog.get_logger()


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """校验密码"""
    return bcrypt.checkpw(plain_password.encode(), hashed_password.encode())


def hash_password(password: str) -> str:
    """生成密码哈希"""
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def _issue_tokens(user: User) -> "TokenResponse":
    return TokenResponse(
        access_token=create_access_token(sub=user.id, username=user.username, name=user.name),
        refresh_token=create_refresh_token(sub=user.id),
    )


# ── 请求/响应模型 ──

class RegisterRequest(BaseModel):
    username: str = Field(min_length=1, max_length=64)
    password: str = Field(min_length=6, max_length=72)  # bcrypt 只取前 72 字节
    name: str | None = Field(default=None, max_length=128)


class UserResponse(BaseModel):
    id: str
    username: str
    name: str | None = None


class LoginRequest(BaseModel):
    username: str
    password: str


class TokenResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class RefreshRequest(BaseModel):
    refresh_token: str


# ── 接口 ──

@router.post("/register", response_model=UserResponse, status_code=201)
async def register(body: RegisterRequest, db: AsyncSession = Depends(get_db)):
    """注册新用户"""
    user = User(
        username=body.username,
        name=body.name or body.username,
        hashed_pwd=hash_password(body.password),
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise HTTPException(status_code=409, detail="用户名已存在")

    AUTH_EVENT_TOTAL.labels(event="register").inc()
    log.info("用户注册成功", username=user.username, user_id=user.id)
    return UserResponse(id=user.id, username=user.username, name=user.name)


@router.post("/login", response_model=TokenResponse)
async def login(body: LoginRequest, db: AsyncSession = Depends(get_db)):
    """用户登录：校验密码，签发 JWT"""
    result = await db.execute(select(User).where(User.username == body.username))
    user = result.scalar_one_or_none()

    if not user or not verify_password(body.password, user.hashed_pwd):
        AUTH_EVENT_TOTAL.labels(event="login_failed").inc()
        raise AuthError("用户名或密码错误")

    if not user.is_active:
        raise HTTPException(status_code=403, detail="账户已禁用")

    AUTH_EVENT_TOTAL.labels(event="login").inc()
    log.info("用户登录成功", username=user.username)
    return _issue_tokens(user)


@router.post("/refresh", response_model=TokenResponse)
async def refresh(body: RefreshRequest, db: AsyncSession = Depends(get_db)):
    """刷新 Token：用 refresh_token 换取新的 access_token"""
    payload = decode_token(body.refresh_token, expected_type="refresh")

    # 查用户最新信息
    user = await db.get(User, payload["sub"])
    if not user or not user.is_active:
        raise HTTPException(status_code=403, detail="用户不存在或已禁用")

    AUTH_EVENT_TOTAL.labels(event="refresh").inc()
    return _issue_tokens(user)


@router.post("/logout")
async def logout(
    user: AuthenticatedUser = Depends(get_current_user),
    credentials=Depends(bearer_scheme),
    redis_conn: aioredis.Redis = Depends(get_redis),
):
    """注销：将当前 Token 加入黑名单"""
    payload = decode_token(credentials.credentials, expected_type="access")

    jti = payload.get("jti")
    exp = payload.get("exp")
    if jti and exp:
        # 黑名单 TTL = token 剩余有效时间
        ttl = int(exp - datetime.now(timezone.utc).timestamp())
        await revoke_token(redis_conn, jti, ttl)

    AUTH_EVENT_TOTAL.labels(event="logout").inc()
    log.info("用户注销", username=user.username)
    return {"message": "已注销"}


@router.get("/session")
async def session(user: AuthenticatedUser = Depends(get_current_user)):
    """当前会话：{"user": {"id", "name", "username"}}"""
    return user.as_session()
