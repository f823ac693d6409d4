"""标识符校验 -- 外部输入进入文件路径或子进程参数前的唯一闸口

项目 ID 会拼进 projects/<id>/board.json 和 git pathspec，
commit hash 会作为 git 参数传入，两者都必须先经过这里。
"""

import re

from .exceptions import InvalidIdentifierError

PROJECT_ID_PATTERN = re.compile(r"[A-Za-z0-9_-]+")
COMMIT_HASH_PATTERN = re.compile(r"[0-9a-fA-F]+")

PROJECT_ID_MAX_LENGTH = 128
COMMIT_HASH_MAX_LENGTH = 64

_PATH_SEPARATORS = ("/", "\\")


def validate_project_id(raw: object) -> str:
    """校验项目 ID

    拒绝：空值、任何 ".."、任何路径分隔符、[A-Za-z0-9_-] 以外的字符、超长输入。

    Returns:
        校验通过的项目 ID（原样返回）

    Raises:
        InvalidIdentifierError: 校验失败
    """
    if not isinstance(raw, str) or not raw:
        raise InvalidIdentifierError("project_id", raw, "must be a non-empty string")
    if ".." in raw:
        raise InvalidIdentifierError("project_id", raw, "must not contain '..'")
    if any(sep in raw for sep in _PATH_SEPARATORS):
        raise InvalidIdentifierError("project_id", raw, "must not contain path separators")
    if len(raw) > PROJECT_ID_MAX_LENGTH:
        raise InvalidIdentifierError("project_id", raw, "is too long")
    # fullmatch: "$" 会放过结尾的换行符
    if PROJECT_ID_PATTERN.fullmatch(raw) is None:
        raise InvalidIdentifierError(
            "project_id", raw, "may only contain letters, digits, '_' and '-'"
        )
    return raw


def validate_commit_hash(raw: object) -> str:
    """校验 commit hash：非空十六进制字符串（大小写不敏感）

    Raises:
        InvalidIdentifierError: 校验失败
    """
    if not isinstance(raw, str) or not raw:
        raise InvalidIdentifierError("commit_hash", raw, "must be a non-empty string")
    if len(raw) > COMMIT_HASH_MAX_LENGTH:
        raise InvalidIdentifierError("commit_hash", raw, "is too long")
    if COMMIT_HASH_PATTERN.fullmatch(raw) is None:
        raise InvalidIdentifierError("commit_hash", raw, "must be hexadecimal")
    return raw
