"""structlog 配置模块

dev 模式：pretty print 可读输出
json 模式：结构化 JSON 输出
每条日志都带 service 与 workspace 字段，多个看板实例共用日志管道时可区分来源。
Logfire APM：LOGFIRE_SEND_TO_LOGFIRE 环境变量控制，false 时降级为纯本地日志。
"""

import logging
import os
from pathlib import Path

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

SERVICE_NAME = "clawboard-gateway"

# 轮询频繁、输出价值低的第三方 logger
_NOISY_LOGGERS = ("uvicorn.access", "watchfiles")


def workspace_fields(workspace: Path | None) -> Processor:
    """生成给每条日志补充 service / workspace 字段的 processor"""
    static = {"service": SERVICE_NAME}
    if workspace is not None:
        static["workspace"] = str(workspace)

    def _add(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        for key, value in static.items():
            event_dict.setdefault(key, value)
        return event_dict

    return _add


def setup_logging(workspace: Path | None = None) -> None:
    """初始化 structlog 配置

    根据 CLAWBOARD_LOG_FORMAT 环境变量选择渲染模式：
    - "json": 结构化 JSON 输出（生产环境）
    - "dev" (默认): pretty print 可读输出

    CLAWBOARD_LOG_LEVEL 控制根 logger 级别（默认 INFO）。
    """
    log_format = os.environ.get("CLAWBOARD_LOG_FORMAT", "dev")
    log_level = os.environ.get("CLAWBOARD_LOG_LEVEL", "INFO")

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        workspace_fields(workspace),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    renderer: Processor
    if log_format == "json":
        shared_processors.append(structlog.processors.format_exc_info)
        renderer = structlog.processors.JSONRenderer(ensure_ascii=False)
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=shared_processors,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    # uvicorn access log 与 LoggingMiddleware 重复，watchfiles 在 --reload 下逐次刷屏
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def setup_logfire() -> None:
    """Logfire 可选初始化

    LOGFIRE_SEND_TO_LOGFIRE 环境变量控制：
    - "true": 启用 Logfire APM（需要 LOGFIRE_TOKEN）
    - "false" (默认): 纯本地日志
    """
    send_to_logfire = os.environ.get("LOGFIRE_SEND_TO_LOGFIRE", "false").lower()
    if send_to_logfire != "true":
        return
    try:
        import logfire

        logfire.configure()
        logfire.instrument_fastapi()
    except Exception as e:
        # 初始化失败只影响 APM，本地日志照常
        structlog.get_logger().warning(
            "logfire_init_failed",
            error_type=type(e).__name__,
            message="Logfire 初始化失败，降级为纯本地日志",
        )
