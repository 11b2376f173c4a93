"""
待办事项模型：每行归属唯一创建者（created_by_id），创建后不可变更归属
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text, false, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from todo_app.db.models.base import Base, schema_qualified, utcnow


class Todo(Base):
    """待办表"""

    __tablename__ = "todos"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False, comment="任务描述")
    is_completed: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false(), comment="是否完成"
    )
    # 分类只在客户端维护，服务端不校验取值
    category_id: Mapped[str | None] = mapped_column(Text, comment="分类 ID")
    created_by_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey(schema_qualified("users.id"), ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="创建者用户 ID",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        index=True,
        comment="创建时间（列表排序键）",
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        comment="更新时间",
    )

    created_by: Mapped["User"] = relationship(back_populates="todos")  # noqa: F821

    def __repr__(self) -> str:
        return f"<Todo(id={self.id}, owner={self.created_by_id}, completed={self.is_completed})>"
