"""Query parameter extraction.

Pulls the raw include/exclude values out of a request's query parameters
and turns them into a filter plan. Works with a plain dict, a dict of
lists (``urllib.parse.parse_qs``) or any mapping with a ``getlist`` method
(Werkzeug/Starlette multi-dicts).
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from fieldscope.config import FilterConfig
from fieldscope.errors import InvalidPathError
from fieldscope.core.plan import FilterPlan, build_plan


INCLUDE_KEYS = ("includeOnly", "include_only")
EXCLUDE_KEYS = ("excludeOnly", "exclude_only")


@dataclass(frozen=True)
class FieldParams:
    """
    请求中的原始过滤参数

    Attributes:
        include_only: 原始 include 字符串（多个值以逗号合并）
        exclude_only: 原始 exclude 字符串
    """
    include_only: Optional[str] = None
    exclude_only: Optional[str] = None

    @classmethod
    def from_query(
        cls,
        params: Mapping[str, Any],
        strict: Optional[bool] = None,
        config: Optional[FilterConfig] = None,
    ) -> "FieldParams":
        """
        从查询参数中提取

        Args:
            params: 查询参数
            strict: 为 True 时拒绝同时提供 include 和 exclude；
                为 None 时使用 config.strict_params
            config: 提供默认 strict 设置的配置

        Raises:
            InvalidPathError: strict 模式下同时提供了两个参数
        """
        include = _first_present(params, INCLUDE_KEYS)
        exclude = _first_present(params, EXCLUDE_KEYS)

        if strict is None:
            strict = config.strict_params if config is not None else False
        if strict and include and exclude:
            raise InvalidPathError(
                f"{INCLUDE_KEYS[0]}={include}&{EXCLUDE_KEYS[0]}={exclude}",
                f"{INCLUDE_KEYS[0]} and {EXCLUDE_KEYS[0]} cannot be combined",
            )
        return cls(include_only=include, exclude_only=exclude)

    @property
    def is_empty(self) -> bool:
        return not (self.include_only or self.exclude_only)

    def to_plan(self) -> FilterPlan:
        return build_plan(self.include_only, self.exclude_only)


def _first_present(params: Mapping[str, Any], keys: tuple[str, ...]) -> Optional[str]:
    for key in keys:
        if key not in params:
            continue
        if hasattr(params, "getlist"):
            values = params.getlist(key)
        else:
            values = params[key]
        if values is None:
            return None
        if isinstance(values, str):
            return values
        return ",".join(str(v) for v in values if v is not None)
    return None
