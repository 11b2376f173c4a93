"""
控制台 Todo 客户端：登录后通过命令增删改查自己的待办

运行方式：
    poetry run python scripts/todo_console.py --base-url http://127.0.0.1:8000

首次使用可加 --register 自动注册账号。
"""

import argparse
import asyncio
import sys
from pathlib import Path

from prompt_toolkit import PromptSession

# 确保项目根目录在 sys.path 中
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from todo_app.client.api import TodoApiClient
from todo_app.client.cache import QueryCache
from todo_app.client.console import TodoConsole, format_notification
from todo_app.client.mutations import TodoMutations
from todo_app.client.notifications import Notifier
from todo_app.observability.logging_config import setup_logging
from todo_app.todo.errors import TodoServiceError


async def main(base_url: str, register: bool) -> None:
    """登录 → 进入命令循环"""
    print("=" * 60)
    print("  Todo 控制台")
    print("=" * 60)

    pt_session = PromptSession()
    username = (await pt_session.prompt_async("用户名: ")).strip()
    password = await pt_session.prompt_async("密码: ", is_password=True)

    async with TodoApiClient(base_url) as api:
        try:
            if register:
                await api.register(username, password)
            await api.login(username, password)
            session = await api.session()
        except TodoServiceError as e:
            print(f"\033[31m登录失败: {e.message}\033[0m")
            return

        print(f"\033[90m  Logged in as {session['user']['name']}\033[0m\n")

        notifier = Notifier()
        console = TodoConsole(TodoMutations(api, QueryCache(), notifier), notifier)
        await console.run()

        for notification in notifier.drain():
            print(format_notification(notification))
    print("再见！")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Todo 控制台客户端")
    parser.add_argument("--base-url", default="http://127.0.0.1:8000")
    parser.add_argument("--register", action="store_true", help="先注册再登录")
    args = parser.parse_args()

    setup_logging(env="test")  # 控制台只打印 WARNING 以上
    asyncio.run(main(args.base_url, args.register))
