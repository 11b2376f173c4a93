"""
客户端变更层：把四个过程包装成绑定本地状态的动作

- create 成功：清空表单 → 失效列表缓存 → 成功提示
- toggle / delete 成功：失效列表缓存
- 任意失败：错误提示，不自动重试
- 行级 in-flight 标记：同一行的请求未返回前拒绝重复提交，不同行之间互不影响
"""

import structlog

from todo_app.client.api import TodoApiClient
from todo_app.client.cache import QueryCache
from todo_app.client.notifications import Notifier
from todo_app.client.views import TodoForm
from todo_app.todo.errors import InternalError, TodoServiceError
from todo_app.todo.schemas import TodoItem, TodoRecord

log = structlog.get_logger()

LIST_KEY = "todo.getItems"
GENERIC_FAILURE = "Something went wrong, please try again"


class TodoMutations:
    """变更动作集合，缓存与通知对象由外部注入"""

    def __init__(self, api: TodoApiClient, cache: QueryCache, notifier: Notifier) -> None:
        self._api = api
        self._cache = cache
        self._notifier = notifier
        self.in_flight: set[int] = set()

    def is_pending(self, todo_id: int) -> bool:
        return todo_id in self.in_flight

    async def items(self) -> list[TodoItem]:
        """列表查询，走缓存；失效后回源"""
        return await self._cache.fetch(LIST_KEY, self._api.get_items)

    async def create(self, form: TodoForm) -> TodoRecord | None:
        if not form.is_valid:
            self._notifier.error("Task name is required")
            return None

        try:
            record = await self._api.create_todo(form.text, category_id=form.category_id)
        except TodoServiceError as e:
            self._report("create", e)
            return None

        form.clear()
        self._cache.invalidate(LIST_KEY)
        self._notifier.success("Task added")
        return record

    async def toggle(self, todo_id: int, is_completed: bool) -> bool:
        if not self._claim(todo_id):
            return False
        try:
            await self._api.update_completion(todo_id, is_completed)
        except TodoServiceError as e:
            self._report("toggle", e)
            return False
        finally:
            self.in_flight.discard(todo_id)

        self._cache.invalidate(LIST_KEY)
        return True

    async def delete(self, todo_id: int) -> bool:
        if not self._claim(todo_id):
            return False
        try:
            await self._api.delete_item(todo_id)
        except TodoServiceError as e:
            self._report("delete", e)
            return False
        finally:
            self.in_flight.discard(todo_id)

        self._cache.invalidate(LIST_KEY)
        return True

    def _claim(self, todo_id: int) -> bool:
        if todo_id in self.in_flight:
            log.debug("行操作进行中，忽略重复提交", todo_id=todo_id)
            return False
        self.in_flight.add(todo_id)
        return True

    def _report(self, action: str, error: TodoServiceError) -> None:
        # 内部错误原文只进日志
        if isinstance(error, InternalError):
            log.error("Todo 操作失败", action=action, error=error.message)
            self._notifier.error(GENERIC_FAILURE)
        else:
            self._notifier.error(error.message)
