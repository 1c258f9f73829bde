"""
空容器清理 - 过滤后移除变为空的复合字段

Pruning is opt-in. Inside a walk only composites that lost all of their
children to filtering are removed; the cascade then reaches parents that
become empty in turn. The standalone :func:`prune` cannot know what the
input looked like and removes every empty composite below the root.
"""

from typing import Any


def is_empty_composite(value: Any) -> bool:
    """True for an empty dict, list, tuple, set or frozenset."""
    return isinstance(value, (dict, list, tuple, set, frozenset)) and len(value) == 0


def should_prune(enabled: bool, had_children: bool, filtered: Any) -> bool:
    """
    判断遍历中的复合字段是否应被移除

    Args:
        enabled: 是否启用清理
        had_children: 输入中该字段是否有子元素
        filtered: 过滤后的值

    Returns:
        True 表示应从父节点中移除
    """
    return enabled and had_children and is_empty_composite(filtered)


def prune(value: Any, enabled: bool = True) -> Any:
    """
    Remove empty composites from an already filtered value.

    Returns a new value; the input is never modified. The root itself is
    returned even if it ends up empty. With ``enabled=False`` the value is
    returned unchanged.
    """
    if not enabled:
        return value
    return _prune(value)


def _prune(value: Any) -> Any:
    if isinstance(value, dict):
        result = {}
        for key, item in value.items():
            cleaned = _prune(item)
            if not is_empty_composite(cleaned):
                result[key] = cleaned
        return result

    if isinstance(value, (list, tuple)):
        items = []
        for item in value:
            cleaned = _prune(item)
            if not is_empty_composite(cleaned):
                items.append(cleaned)
        return tuple(items) if isinstance(value, tuple) else items

    return value
