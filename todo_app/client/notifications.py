"""
瞬时通知（toast）：变更层只负责产生，展示层取走后渲染
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class Notification:
    level: Literal["success", "error"]
    message: str


class Notifier:
    """收集待展示的通知；可选 sink 用于即时输出"""

    def __init__(self, sink: Callable[[Notification], None] | None = None) -> None:
        self._pending: list[Notification] = []
        self._sink = sink

    def success(self, message: str) -> None:
        self._emit(Notification("success", message))

    def error(self, message: str) -> None:
        self._emit(Notification("error", message))

    def drain(self) -> list[Notification]:
        """取走所有待展示通知"""
        pending, self._pending = self._pending, []
        return pending

    def _emit(self, notification: Notification) -> None:
        self._pending.append(notification)
        if self._sink is not None:
            self._sink(notification)
