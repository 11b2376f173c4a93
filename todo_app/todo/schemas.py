"""
Todo 请求/响应模型

线上字段统一 camelCase（isCompleted / categoryId / createdAt），
Python 侧保持 snake_case，通过 alias_generator 双向映射。
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """camelCase 线上格式基类，同时接受 snake_case 入参"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ── 请求模型 ──

class CreateTodoRequest(CamelModel):
    """
    创建请求。

    归属人与时间戳一律由服务端决定：请求体里的 createdById / createdAt / updatedAt
    不在模型内，按 extra="ignore" 直接丢弃。
    """

    text: str = Field(min_length=1, description="任务描述")
    is_completed: bool = False
    category_id: str | None = None

    @field_validator("category_id", mode="before")
    @classmethod
    def blank_category_to_none(cls, v: object) -> object:
        """表单未选分类时前端传空字符串，统一存 NULL"""
        if isinstance(v, str) and not v.strip():
            return None
        return v


class UpdateCompletionRequest(CamelModel):
    id: int
    is_completed: bool


class DeleteItemRequest(CamelModel):
    id: int


# ── 响应模型 ──

def _as_utc(v: datetime) -> datetime:
    """SQLite 等不带时区的存储返回 naive 时间，统一按 UTC 补齐"""
    if v.tzinfo is None:
        return v.replace(tzinfo=timezone.utc)
    return v


class TodoItem(CamelModel):
    """列表投影：getItems 只返回这 5 个字段"""

    id: int
    title: str
    is_completed: bool
    category_id: str | None = None
    created_at: datetime

    @field_validator("created_at", mode="after")
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        return _as_utc(v)


class TodoRecord(TodoItem):
    """完整行：createToDo / updateCompletion 返回"""

    created_by_id: str
    updated_at: datetime

    @field_validator("created_at", "updated_at", mode="after")
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        return _as_utc(v)


class DeleteItemResponse(CamelModel):
    id: int
    deleted: bool = True


class ErrorResponse(BaseModel):
    """统一错误体"""

    code: str
    detail: str
