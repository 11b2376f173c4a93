"""
展示层：表单状态 + 列表表格渲染（纯文本，控制台使用）
"""

from collections.abc import Collection, Sequence
from dataclasses import dataclass

from todo_app.client.categories import category_label
from todo_app.todo.schemas import TodoItem

_HEADERS = ("#", "Task", "Category", "Status")


@dataclass
class TodoForm:
    """新建表单：text 必填，category_id 取自固定分类表"""

    text: str = ""
    category_id: str | None = None

    @property
    def is_valid(self) -> bool:
        return bool(self.text.strip())

    def clear(self) -> None:
        self.text = ""
        self.category_id = None


def status_badge(item: TodoItem) -> str:
    return "Completed" if item.is_completed else "Pending"


def render_table(items: Sequence[TodoItem], in_flight: Collection[int] = ()) -> str:
    """
    一行一个 Todo：序号、标题、分类名、状态。

    请求未返回的行在序号后加 "*"，表示该行操作按钮暂不可用。
    """
    if not items:
        return "No tasks yet."

    rows = [
        (
            f"{index}{'*' if item.id in in_flight else ''}",
            item.title,
            category_label(item.category_id),
            status_badge(item),
        )
        for index, item in enumerate(items, start=1)
    ]
    widths = [max(len(str(cell)) for cell in column) for column in zip(_HEADERS, *rows)]

    def fmt(cells: Sequence[str]) -> str:
        return " | ".join(cell.ljust(width) for cell, width in zip(cells, widths)).rstrip()

    lines = [fmt(_HEADERS), "-+-".join("-" * width for width in widths)]
    lines.extend(fmt(row) for row in rows)
    return "\n".join(lines)
