"""错误响应 -- 统一 {"error": {"code", "message"}} 结构

文档缺失与 git 失败不在此处：它们在服务层降级为默认值，以 200 返回。
"""

from clawboard.core.exceptions import (
    BoardError,
    InvalidIdentifierError,
    TaskNotFoundError,
    WriteFailureError,
)
from starlette.responses import JSONResponse


def error_response(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": {"code": code, "message": message}},
    )


def board_error_response(exc: BoardError) -> JSONResponse:
    """BoardError 子类 -> HTTP 错误响应"""
    if isinstance(exc, InvalidIdentifierError):
        return error_response(400, "INVALID_IDENTIFIER", str(exc))
    if isinstance(exc, TaskNotFoundError):
        return error_response(404, "TASK_NOT_FOUND", str(exc))
    if isinstance(exc, WriteFailureError):
        # 不回显底层 OSError 细节（可能包含本机路径）
        return error_response(500, "WRITE_FAILED", "Failed to write board")
    return error_response(500, "BOARD_ERROR", str(exc))
