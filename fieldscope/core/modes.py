"""Filtering mode resolution."""

from enum import Enum

from fieldscope.core.paths import PathSpec


class Mode(Enum):
    """Active filtering mode."""
    PASS_THROUGH = "pass_through"   # nothing requested, emit everything
    WHITELIST = "whitelist"         # include spec set (exclude spec prunes within it)
    BLACKLIST = "blacklist"         # only exclude spec set


def resolve_mode(include: PathSpec, exclude: PathSpec) -> Mode:
    """
    根据两个规格是否为空确定过滤模式

    | include | exclude | mode         |
    |---------|---------|--------------|
    | empty   | empty   | PASS_THROUGH |
    | set     | any     | WHITELIST    |
    | empty   | set     | BLACKLIST    |
    """
    if not include.is_empty:
        return Mode.WHITELIST
    if not exclude.is_empty:
        return Mode.BLACKLIST
    return Mode.PASS_THROUGH
