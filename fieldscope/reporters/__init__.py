"""
Reporters Layer - 报告层

包含 JSON、YAML 输出和 Rich 终端报告器。
"""

from fieldscope.reporters.base import Reporter, to_plain
from fieldscope.reporters.json_reporter import JsonReporter
from fieldscope.reporters.yaml_reporter import YamlReporter
from fieldscope.reporters.rich_reporter import RichReporter

__all__ = [
    "Reporter",
    "to_plain",
    "JsonReporter",
    "YamlReporter",
    "RichReporter",
]
