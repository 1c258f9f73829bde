"""
异常定义 - fieldscope 的错误类型

- InvalidPathError: 路径规格语法错误，过滤不会执行
- MaxDepthExceeded: 遍历深度超过上限
- ConfigError: 配置文件格式错误

结构环路 (CycleDetected) 不是异常，而是记录在 FilterResult 中的诊断信息。
"""

from typing import Optional


class FieldScopeError(Exception):
    """fieldscope 错误基类"""
    pass


class InvalidPathError(FieldScopeError):
    """
    路径规格语法错误

    Attributes:
        raw: 出错的原始字符串
        reason: 错误原因
        segment: 出错的路径段（如果能定位）
    """

    def __init__(self, raw: str, reason: str, segment: Optional[str] = None):
        self.raw = raw
        self.reason = reason
        self.segment = segment
        super().__init__(f"Invalid field path '{raw}': {reason}")


class MaxDepthExceeded(FieldScopeError):
    """
    遍历深度超过上限

    Attributes:
        limit: 配置的最大深度
        path: 超限时正在处理的字段路径
    """

    def __init__(self, limit: int, path: str):
        self.limit = limit
        self.path = path
        where = path or "<root>"
        super().__init__(f"Maximum depth {limit} exceeded at '{where}'")


class ConfigError(FieldScopeError):
    """配置文件错误"""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Invalid configuration in {source}: {reason}")
