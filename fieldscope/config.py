"""
配置模块 - 读取 fieldscope 的默认行为

配置来源（按优先级）：
1. 命令行参数
2. --config 指定的文件（.toml 或 .yaml/.yml）
3. 当前目录下的 .fieldscope.yaml / .fieldscope.yml
4. 当前目录下 pyproject.toml 中的 [tool.fieldscope]
"""

import dataclasses
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from fieldscope.errors import ConfigError
from fieldscope.core.walker import DEFAULT_MAX_DEPTH

# Handle tomllib/tomli for different Python versions
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

logger = logging.getLogger(__name__)


# ============================================================
# 配置常量
# ============================================================

CONFIG_CANDIDATES = [
    ".fieldscope.yaml",
    ".fieldscope.yml",
    "pyproject.toml",
]

OUTPUT_FORMATS = ("json", "yaml", "rich")


# ============================================================
# 数据模型
# ============================================================

@dataclass
class FilterConfig:
    """Filtering and output defaults."""
    prune_empty: bool = False               # Remove composites emptied by filtering
    max_depth: int = DEFAULT_MAX_DEPTH      # Nesting limit before MaxDepthExceeded
    strict_params: bool = False             # Reject includeOnly + excludeOnly together
    output_format: str = "json"             # json, yaml or rich
    indent: int = 2                         # Indent for json/yaml output
    source: Optional[str] = None            # Where the values came from

    def merge(self, **overrides: Any) -> "FilterConfig":
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        merged = dataclasses.replace(self, **changes)
        _validate(merged, merged.source or "<options>")
        return merged


_FIELD_TYPES: dict[str, type] = {
    "prune_empty": bool,
    "max_depth": int,
    "strict_params": bool,
    "output_format": str,
    "indent": int,
}


# ============================================================
# 加载函数
# ============================================================

def load_config(path: Optional[Path] = None, search_dir: Optional[Path] = None) -> FilterConfig:
    """
    加载配置

    Args:
        path: 显式指定的配置文件
        search_dir: 未指定文件时搜索的目录，默认当前目录

    Returns:
        FilterConfig 对象；找不到配置文件时返回默认值

    Raises:
        ConfigError: 文件无法解析或包含未知键
    """
    if path is not None:
        if not path.exists():
            raise ConfigError(str(path), "file does not exist")
        return _load_file(path, explicit=True)

    directory = search_dir or Path.cwd()
    for candidate in CONFIG_CANDIDATES:
        config_path = directory / candidate
        if not config_path.is_file():
            continue
        config = _load_file(config_path)
        if config.source is not None:
            return config

    return FilterConfig()


def _load_file(path: Path, explicit: bool = False) -> FilterConfig:
    suffix = path.suffix.lower()
    if suffix == ".toml":
        data = _read_toml(path)
    elif suffix in (".yaml", ".yml"):
        data = _read_yaml(path)
    else:
        raise ConfigError(str(path), f"unsupported config format '{suffix}'")

    if data is None:
        if explicit:
            logger.warning(f"No fieldscope settings in {path}, using defaults")
        return FilterConfig()

    return config_from_mapping(data, str(path))


def _read_toml(path: Path) -> Optional[dict[str, Any]]:
    try:
        with open(path, "rb") as f:
            document = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(str(path), f"invalid TOML: {e}") from e

    if path.name == "pyproject.toml":
        return document.get("tool", {}).get("fieldscope")
    return document


def _read_yaml(path: Path) -> Optional[dict[str, Any]]:
    try:
        with open(path, encoding="utf-8") as f:
            document = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(str(path), f"invalid YAML: {e}") from e

    if document is None:
        return None
    if not isinstance(document, dict):
        raise ConfigError(str(path), "top level must be a mapping")
    return document


def config_from_mapping(data: dict[str, Any], source: str) -> FilterConfig:
    """
    从字典构建配置

    Keys may use dashes or underscores (``prune-empty`` or ``prune_empty``).
    """
    values: dict[str, Any] = {}
    for raw_key, value in data.items():
        key = str(raw_key).replace("-", "_")
        if key not in _FIELD_TYPES:
            raise ConfigError(source, f"unknown key '{raw_key}'")
        values[key] = value

    config = FilterConfig(source=source, **values)
    _validate(config, source)
    return config


def _validate(config: FilterConfig, source: str) -> None:
    for key, expected in _FIELD_TYPES.items():
        value = getattr(config, key)
        # bool is an int subclass; keep the two apart
        if expected is int and isinstance(value, bool):
            raise ConfigError(source, f"'{key}' must be an integer")
        if not isinstance(value, expected):
            raise ConfigError(source, f"'{key}' must be of type {expected.__name__}")

    if config.max_depth < 0:
        raise ConfigError(source, "'max_depth' must be >= 0")
    if config.indent < 0:
        raise ConfigError(source, "'indent' must be >= 0")
    if config.output_format not in OUTPUT_FORMATS:
        raise ConfigError(
            source,
            f"'output_format' must be one of {', '.join(OUTPUT_FORMATS)}",
        )
