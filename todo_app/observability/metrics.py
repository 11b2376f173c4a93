"""
Prometheus 指标定义

所有指标统一在此文件定义，中间件和业务代码按需引用。
"""

from prometheus_client import Counter, Histogram

# ── 请求级指标 ──

REQUEST_TOTAL = Counter(
    "todo_request_total",
    "HTTP 请求总数",
    ["method", "endpoint", "status_code"],
)

REQUEST_DURATION = Histogram(
    "todo_request_duration_ms",
    "HTTP 请求耗时（毫秒）",
    ["method", "endpoint"],
    buckets=[5, 10, 25, 50, 100, 200, 500, 1000, 2000],
)

# ── 业务指标 ──

TODO_OPERATION_TOTAL = Counter(
    "todo_operation_total",
    "Todo 操作总数",
    ["operation", "status"],  # operation: create/update_completion/delete; status: success/invalid/not_found/error
)

AUTH_EVENT_TOTAL = Counter(
    "todo_auth_event_total",
    "鉴权事件总数",
    ["event"],  # register/login/login_failed/refresh/logout/rejected
)

# ── 错误指标 ──

ERROR_TOTAL = Counter(
    "todo_error_total",
    "错误总数",
    ["error_type"],  # BAD_REQUEST/UNAUTHORIZED/NOT_FOUND/INTERNAL_SERVER_ERROR
)
