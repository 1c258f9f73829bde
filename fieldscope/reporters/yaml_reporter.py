"""
YAML 报告器 - 输出过滤后的 YAML 文档
"""

import sys
from typing import TextIO

import yaml

from fieldscope.core.walker import FilterResult
from fieldscope.reporters.base import to_plain


class YamlReporter:
    """YAML 报告器"""

    def __init__(self, output: TextIO | None = None, indent: int = 2):
        self.output = output or sys.stdout
        self.indent = indent

    def report(self, result: FilterResult, target: str) -> None:
        yaml_str = yaml.safe_dump(
            to_plain(result.value),
            indent=max(self.indent, 2),
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
        )
        self.output.write(yaml_str)
