"""
Todo 过程调用客户端：httpx 异步封装 /auth 与 /todo 接口

服务端错误体 {"code", "detail"} 在这里还原为 todo_app.todo.errors 中的异常，
调用方只需要处理 TodoServiceError 一种异常族。
"""

from typing import Any

import httpx
import structlog

from todo_app.todo.errors import (
    ERRORS_BY_CODE,
    AuthError,
    InternalError,
    NotFoundError,
    TodoServiceError,
    ValidationError,
)
from todo_app.todo.schemas import TodoItem, TodoRecord

log = structlog.get_logger()


def _error_from_response(resp: httpx.Response) -> TodoServiceError:
    """错误响应 → 业务异常，未知错误码按 HTTP 状态码兜底"""
    try:
        body = resp.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}
    message = str(body.get("detail") or resp.reason_phrase or "Request failed")

    error_cls = ERRORS_BY_CODE.get(body.get("code", ""))
    if error_cls is None:
        if resp.status_code == 401:
            error_cls = AuthError
        elif resp.status_code == 404:
            error_cls = NotFoundError
        elif 400 <= resp.status_code < 500:
            error_cls = ValidationError
        else:
            error_cls = InternalError
    return error_cls(message)


class TodoApiClient:
    """Todo 服务的类型化客户端，登录后自动携带 Bearer Token"""

    def __init__(
        self,
        base_url: str,
        *,
        token: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)
        self.token = token

    async def __aenter__(self) -> "TodoApiClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # ── 认证 ──

    async def register(self, username: str, password: str, name: str | None = None) -> dict:
        return await self._call("POST", "/auth/register", {"username": username, "password": password, "name": name})

    async def login(self, username: str, password: str) -> None:
        tokens = await self._call("POST", "/auth/login", {"username": username, "password": password})
        self.token = tokens["access_token"]

    async def session(self) -> dict:
        return await self._call("GET", "/auth/session")

    # ── Todo 过程 ──

    async def create_todo(
        self,
        text: str,
        *,
        category_id: str | None = None,
        is_completed: bool = False,
    ) -> TodoRecord:
        data = await self._call(
            "POST",
            "/todo/createToDo",
            {"text": text, "isCompleted": is_completed, "categoryId": category_id},
        )
        return TodoRecord.model_validate(data)

    async def get_items(self) -> list[TodoItem]:
        data = await self._call("GET", "/todo/getItems")
        return [TodoItem.model_validate(item) for item in data]

    async def update_completion(self, todo_id: int, is_completed: bool) -> TodoRecord:
        data = await self._call("POST", "/todo/updateCompletion", {"id": todo_id, "isCompleted": is_completed})
        return TodoRecord.model_validate(data)

    async def delete_item(self, todo_id: int) -> None:
        await self._call("POST", "/todo/deleteItem", {"id": todo_id})

    # ── 内部 ──

    async def _call(self, method: str, path: str, payload: dict | None = None) -> Any:
        headers = {"Authorization": f"Bearer {self.token}"} if self.token else {}
        try:
            resp = await self._client.request(method, path, json=payload, headers=headers)
        except httpx.HTTPError as e:
            log.error("Todo 接口请求失败", method=method, path=path, error=str(e))
            raise InternalError(f"Request to {path} failed: {e}", cause=e) from e

        if resp.is_success:
            return resp.json()

        error = _error_from_response(resp)
        log.info("Todo 接口返回错误", path=path, status_code=resp.status_code, code=error.code)
        raise error
