"""
客户端查询缓存：按 key 缓存查询结果，变更成功后由调用方显式 invalidate

invalidate 只丢弃缓存，下一次 fetch 时回源重新拉取。
"""

from collections.abc import Awaitable, Callable
from typing import Any


class QueryCache:
    """显式传入变更层的查询缓存，不依赖任何全局状态"""

    def __init__(self) -> None:
        self._entries: dict[str, Any] = {}

    def get(self, key: str) -> Any | None:
        return self._entries.get(key)

    def set(self, key: str, value: Any) -> None:
        self._entries[key] = value

    def has(self, key: str) -> bool:
        return key in self._entries

    def invalidate(self, key: str) -> None:
        """丢弃 key 对应的缓存"""
        self._entries.pop(key, None)

    async def fetch(self, key: str, loader: Callable[[], Awaitable[Any]]) -> Any:
        """命中直接返回，未命中调用 loader 回源；loader 异常不写缓存"""
        if key in self._entries:
            return self._entries[key]
        value = await loader()
        self._entries[key] = value
        return value
