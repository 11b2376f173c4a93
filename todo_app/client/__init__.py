"""
客户端：过程调用 + 查询缓存 + 变更动作 + 控制台展示
"""

from todo_app.client.api import TodoApiClient
from todo_app.client.cache import QueryCache
from todo_app.client.mutations import LIST_KEY, TodoMutations
from todo_app.client.notifications import Notification, Notifier
from todo_app.client.views import TodoForm, render_table

__all__ = [
    "LIST_KEY",
    "Notification",
    "Notifier",
    "QueryCache",
    "TodoApiClient",
    "TodoForm",
    "TodoMutations",
    "render_table",
]
