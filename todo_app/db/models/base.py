"""
SQLAlchemy 声明基类：所有模型继承此 Base
配置了 DB_SCHEMA 时使用独立 schema 做数据隔离
"""

from datetime import datetime, timezone

from sqlalchemy.orm import DeclarativeBase

from todo_app.config import get_settings

settings = get_settings()


def utcnow() -> datetime:
    """服务端时间戳（UTC），由应用层统一赋值"""
    return datetime.now(timezone.utc)


def schema_qualified(target: str) -> str:
    """外键目标加 schema 前缀，如 users.id → todo_app.users.id"""
    return f"{settings.DB_SCHEMA}.{target}" if settings.DB_SCHEMA else target


class Base(DeclarativeBase):
    """声明基类，统一使用 DB_SCHEMA"""

    __abstract__ = True

    __table_args__ = {"schema": settings.DB_SCHEMA or None}
