"""TraceMiddleware -- 项目级日志关联

从 /api/board/<id>、/api/git-log/<id>、/api/git-diff/<id>/<hash> 路径提取项目 ID
绑定为 project_id。此处仅用于日志关联，合法性校验仍在路由/服务层完成。
"""

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# 路径前缀（不含项目 ID 段）
_PROJECT_SCOPED_PREFIXES = ("board", "git-log", "git-diff")

# 绑定到日志的值的最大长度
_MAX_BOUND_LENGTH = 128


def extract_project_id(path: str) -> str | None:
    """从请求路径提取项目 ID 段，不匹配时返回 None"""
    parts = path.strip("/").split("/")
    if len(parts) >= 3 and parts[0] == "api" and parts[1] in _PROJECT_SCOPED_PREFIXES:
        return parts[2][:_MAX_BOUND_LENGTH] or None
    return None


class TraceMiddleware(BaseHTTPMiddleware):
    """项目级追踪中间件 -- 为项目操作绑定 project_id"""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        project_id = extract_project_id(request.url.path)
        if project_id:
            structlog.contextvars.bind_contextvars(project_id=project_id)

        return await call_next(request)
