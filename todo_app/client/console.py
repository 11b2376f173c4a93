"""
控制台展示层：解析用户命令 → 调用变更层 → 重新渲染列表

支持命令：
    /add <text> [#分类]   — 新建（分类：Work / Personal / Other）
    /done <序号>          — 标记完成
    /undo <序号>          — 标记未完成
    /del <序号>           — 删除
    /list                 — 刷新列表
    /quit                 — 退出
"""

from prompt_toolkit import PromptSession

from todo_app.client.categories import CATEGORIES, parse_category
from todo_app.client.mutations import TodoMutations
from todo_app.client.notifications import Notification, Notifier
from todo_app.client.views import TodoForm, render_table
from todo_app.todo.errors import TodoServiceError
from todo_app.todo.schemas import TodoItem

HELP_TEXT = (
    "命令: /add <text> [#" + "|#".join(CATEGORIES) + "] | /done <n> | /undo <n> | "
    "/del <n> | /list | /quit"
)

_COLORS = {"success": "\033[32m", "error": "\033[31m"}


def format_notification(notification: Notification) -> str:
    return f"{_COLORS[notification.level]}{notification.message}\033[0m"


class TodoConsole:
    """一条命令一次往返；序号对应最近一次渲染的列表"""

    def __init__(self, mutations: TodoMutations, notifier: Notifier) -> None:
        self._mutations = mutations
        self._notifier = notifier
        self.form = TodoForm()
        self._rows: list[TodoItem] = []

    async def render(self) -> str:
        try:
            self._rows = await self._mutations.items()
        except TodoServiceError as e:
            # 拉取失败时保留上一次的列表
            self._notifier.error(f"Failed to load tasks: {e.message}")
        return render_table(self._rows, self._mutations.in_flight)

    async def handle(self, line: str) -> str | None:
        """执行一条命令，返回需要输出的文本；/quit 返回 None"""
        command, _, arg = line.strip().partition(" ")
        arg = arg.strip()

        if command == "/quit":
            return None
        if command == "/add":
            self._fill_form(arg)
            await self._mutations.create(self.form)
        elif command in ("/done", "/undo", "/del"):
            item = self._row(arg)
            if item is not None:
                if command == "/del":
                    await self._mutations.delete(item.id)
                else:
                    await self._mutations.toggle(item.id, command == "/done")
        elif command != "/list":
            return HELP_TEXT

        return await self._output()

    def _fill_form(self, arg: str) -> None:
        """末尾的 #分类 作为分类，其余作为任务描述"""
        words = arg.split()
        category_id = None
        if words and words[-1].startswith("#"):
            category_id = parse_category(words[-1][1:])
            if category_id is not None:
                words = words[:-1]
        self.form.text = " ".join(words)
        self.form.category_id = category_id

    def _row(self, arg: str) -> TodoItem | None:
        if arg.isdigit() and 1 <= int(arg) <= len(self._rows):
            return self._rows[int(arg) - 1]
        self._notifier.error(f"No task #{arg}")
        return None

    async def _output(self) -> str:
        table = await self.render()
        lines = [format_notification(n) for n in self._notifier.drain()]
        lines.append(table)
        return "\n".join(lines)

    async def run(self) -> None:
        """交互式主循环"""
        pt_session = PromptSession()
        print(HELP_TEXT)
        print(await self.render())

        while True:
            try:
                line = (await pt_session.prompt_async("todo> ")).strip()
            except (EOFError, KeyboardInterrupt):
                break
            if not line:
                continue
            output = await self.handle(line)
            if output is None:
                break
            print(output)
