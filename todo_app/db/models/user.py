"""
用户模型
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, String, func, true
from sqlalchemy.orm import Mapped, mapped_column, relationship
from uuid6 import uuid7

from todo_app.db.models.base import Base, utcnow


class User(Base):
    """用户表"""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid7()))
    username: Mapped[str] = mapped_column(String(64), unique=True, nullable=False, comment="登录名")
    name: Mapped[str | None] = mapped_column(String(128), comment="显示名称")
    hashed_pwd: Mapped[str] = mapped_column(String(256), nullable=False, comment="密码哈希")
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, server_default=true(), comment="是否激活")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), comment="创建时间"
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
        comment="更新时间",
    )

    # 反向关联
    todos: Mapped[list["Todo"]] = relationship(back_populates="created_by")  # noqa: F821
