"""
JSON 报告器 - 输出过滤后的 JSON 文档
"""

import json
import sys
from typing import TextIO

from fieldscope.core.walker import FilterResult
from fieldscope.reporters.base import to_plain


class JsonReporter:
    """JSON 报告器"""

    def __init__(self, output: TextIO | None = None, indent: int = 2, with_meta: bool = False):
        self.output = output or sys.stdout
        self.indent = indent
        self.with_meta = with_meta

    def report(self, result: FilterResult, target: str) -> None:
        """输出过滤后的文档；with_meta 时附带模式、统计和诊断"""
        if self.with_meta:
            data = {
                "target": target,
                "mode": result.mode.value,
                "value": to_plain(result.value),
                "stats": result.stats.to_dict(),
                "diagnostics": [d.to_dict() for d in result.diagnostics],
            }
        else:
            data = to_plain(result.value)

        json_str = json.dumps(data, indent=self.indent or None, ensure_ascii=False)
        print(json_str, file=self.output)
