"""
Todo 模块：用户级待办事项

- schemas / errors：服务端与客户端共用的线上格式和异常
- service：TodoService（依赖数据库与登录态，需显式 import todo_app.todo.service）
"""

from todo_app.todo.errors import (
    AuthError,
    InternalError,
    NotFoundError,
    TodoServiceError,
    ValidationError,
)
from todo_app.todo.schemas import TodoItem, TodoRecord

__all__ = [
    "AuthError",
    "InternalError",
    "NotFoundError",
    "TodoItem",
    "TodoRecord",
    "TodoServiceError",
    "ValidationError",
]
