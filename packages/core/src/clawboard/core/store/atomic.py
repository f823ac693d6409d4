"""原子写入 -- 同目录临时文件 + fsync + os.replace

读者只会看到旧的完整文档或新的完整文档；写入中途崩溃时旧文档保持不变。
临时文件名唯一，两个并发写入方不会互相覆盖对方的临时文件，
但最终 rename 仍然是后到者胜出（不做跨写入方加锁）。
"""

import os
import tempfile
from pathlib import Path

from ..exceptions import WriteFailureError


def atomic_write_text(path: Path, text: str) -> None:
    """原子地将文本写入 path

    Raises:
        WriteFailureError: 任何磁盘错误（目标文件保持写入前的状态）
    """
    tmp_name: str | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
        )
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(text)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_name, path)
        tmp_name = None
    except OSError as e:
        raise WriteFailureError(str(path), e) from e
    finally:
        if tmp_name is not None:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
