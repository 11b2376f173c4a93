"""
Todo 服务：createToDo / getItems / updateCompletion / deleteItem 四个过程

行级权限：每个操作都以当前登录用户为归属条件，
查不到（不存在 / 不属于当前用户）统一按 NotFound 处理，不区分两种情况。
"""

from collections.abc import Awaitable, Callable
from typing import TypeVar

import structlog
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from todo_app.db.models.base import utcnow
from todo_app.db.models.todo import Todo
from todo_app.observability.metrics import TODO_OPERATION_TOTAL
from todo_app.security.auth import AuthenticatedUser
from todo_app.todo.errors import AuthError, InternalError, NotFoundError, ValidationError
from todo_app.todo.schemas import TodoItem

log = structlog.get_logger()

T = TypeVar("T")

# todos.id 是 32 位 INTEGER 自增主键，超出范围的 id 不可能命中任何行
_MAX_TODO_ID = 2**31 - 1


def _is_storable_id(todo_id: int) -> bool:
    return 1 <= todo_id <= _MAX_TODO_ID


class TodoService:
    """单个请求内的 Todo 操作，绑定数据库会话与调用方身份"""

    def __init__(self, db: AsyncSession, user: AuthenticatedUser | None):
        # 没有登录态直接拒绝，不落到任何查询
        if user is None or not user.id:
            raise AuthError("未登录或登录已失效")
        self._db = db
        self._user = user

    @property
    def owner_id(self) -> str:
        return self._user.id

    async def create(
        self,
        text: str,
        is_completed: bool = False,
        category_id: str | None = None,
    ) -> Todo:
        """新建一条 Todo，归属人固定为当前用户"""
        if not text:
            TODO_OPERATION_TOTAL.labels(operation="create", status="invalid").inc()
            raise ValidationError("Todo text must not be empty")

        now = utcnow()
        todo = Todo(
            title=text,
            is_completed=is_completed,
            category_id=category_id,
            created_by_id=self.owner_id,
            created_at=now,
            updated_at=now,
        )
        self._db.add(todo)
        try:
            await self._db.commit()
        except SQLAlchemyError as e:
            await self._db.rollback()
            TODO_OPERATION_TOTAL.labels(operation="create", status="error").inc()
            log.error("Todo 创建失败", user_id=self.owner_id, error=str(e), exc_info=True)
            raise InternalError(f"Failed to create ToDo: {e}", cause=e) from e

        TODO_OPERATION_TOTAL.labels(operation="create", status="success").inc()
        log.info("Todo 已创建", todo_id=todo.id, user_id=self.owner_id)
        return todo

    async def list_items(self) -> list[TodoItem]:
        """当前用户的全部 Todo，按创建时间升序（同一时刻按 id）"""
        stmt = (
            select(
                Todo.id,
                Todo.title,
                Todo.is_completed,
                Todo.category_id,
                Todo.created_at,
            )
            .where(Todo.created_by_id == self.owner_id)
            .order_by(Todo.created_at, Todo.id)
        )
        try:
            result = await self._db.execute(stmt)
        except SQLAlchemyError as e:
            log.error("Todo 列表查询失败", user_id=self.owner_id, error=str(e), exc_info=True)
            raise InternalError(f"Failed to list ToDos: {e}", cause=e) from e
        return [TodoItem.model_validate(dict(row._mapping)) for row in result]

    async def update_completion(self, todo_id: int, is_completed: bool) -> Todo:
        """切换完成状态，只允许归属人操作"""
        todo = None
        if _is_storable_id(todo_id):
            todo = await self._execute(
                "update_completion",
                todo_id,
                lambda: self._db.scalar(
                    select(Todo).where(Todo.id == todo_id, Todo.created_by_id == self.owner_id)
                ),
            )
        if todo is None:
            TODO_OPERATION_TOTAL.labels(operation="update_completion", status="not_found").inc()
            log.info("Todo 更新未命中", todo_id=todo_id, user_id=self.owner_id)
            raise NotFoundError("No todo updated")

        todo.is_completed = is_completed
        todo.updated_at = utcnow()
        await self._execute("update_completion", todo_id, self._db.commit)

        TODO_OPERATION_TOTAL.labels(operation="update_completion", status="success").inc()
        log.info("Todo 状态已更新", todo_id=todo_id, is_completed=is_completed)
        return todo

    async def delete(self, todo_id: int) -> None:
        """按 id + 归属人删除"""
        deleted = 0
        if _is_storable_id(todo_id):
            result = await self._execute(
                "delete",
                todo_id,
                lambda: self._db.execute(
                    delete(Todo).where(Todo.id == todo_id, Todo.created_by_id == self.owner_id)
                ),
            )
            await self._execute("delete", todo_id, self._db.commit)
            deleted = result.rowcount

        if not deleted:
            TODO_OPERATION_TOTAL.labels(operation="delete", status="not_found").inc()
            log.info("Todo 删除未命中", todo_id=todo_id, user_id=self.owner_id)
            raise NotFoundError("No todo deleted")

        TODO_OPERATION_TOTAL.labels(operation="delete", status="success").inc()
        log.info("Todo 已删除", todo_id=todo_id, user_id=self.owner_id)

    async def _execute(self, operation: str, todo_id: int, call: Callable[[], Awaitable[T]]) -> T:
        """执行一次存储调用，失败时回滚并包装为 InternalError"""
        try:
            return await call()
        except SQLAlchemyError as e:
            await self._db.rollback()
            TODO_OPERATION_TOTAL.labels(operation=operation, status="error").inc()
            log.error("Todo 存储操作失败", operation=operation, todo_id=todo_id, error=str(e), exc_info=True)
            raise InternalError(f"Failed to {operation} ToDo {todo_id}: {e}", cause=e) from e
