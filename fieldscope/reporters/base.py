"""
报告器基类 - 定义报告器接口
"""

from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any, Protocol
from uuid import UUID

from fieldscope.core.walker import FilterResult


class Reporter(Protocol):
    """报告器协议"""

    def report(self, result: FilterResult, target: str) -> None:
        """输出过滤结果"""
        ...


def to_plain(value: Any) -> Any:
    """
    Convert a filtered value into JSON/YAML-friendly builtins.

    Tuples become lists, enums their value, dates ISO strings and any other
    unknown scalar its ``str()``.
    """
    if value is None or isinstance(value, (str, bool, int, float)):
        return value
    if isinstance(value, dict):
        return {_plain_key(k): to_plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [to_plain(v) for v in value]
    if isinstance(value, Enum):
        return to_plain(value.value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


def _plain_key(key: Any) -> Any:
    # json and yaml both accept scalar keys; anything else becomes text
    if key is None or isinstance(key, (str, bool, int, float)):
        return key
    return str(key)
