"""
Todo 业务异常：统一携带错误码与 HTTP 状态码，由 main.py 的异常处理器转换为响应

错误码对齐 RPC 约定：BAD_REQUEST / UNAUTHORIZED / NOT_FOUND / INTERNAL_SERVER_ERROR
"""


class TodoServiceError(Exception):
    """Todo 服务异常基类"""

    code = "INTERNAL_SERVER_ERROR"
    status_code = 500

    def __init__(self, message: str, cause: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class ValidationError(TodoServiceError):
    """入参不合法（如任务描述为空）"""

    code = "BAD_REQUEST"
    status_code = 422


class AuthError(TodoServiceError):
    """无登录态 / Token 无效"""

    code = "UNAUTHORIZED"
    status_code = 401


class NotFoundError(TodoServiceError):
    """按 id 更新/删除时未命中任何行（不存在或不属于当前用户）"""

    code = "NOT_FOUND"
    status_code = 404


class InternalError(TodoServiceError):
    """存储层意外失败，message 保留原始错误供排查，不直接展示给用户"""


# 错误码 → 异常类，客户端按响应体还原异常
ERRORS_BY_CODE: dict[str, type[TodoServiceError]] = {
    cls.code: cls for cls in (ValidationError, AuthError, NotFoundError, InternalError)
}
