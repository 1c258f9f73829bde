"""
Rich 终端报告器 - 使用 Rich 库输出彩色终端格式

- report: 过滤后的文档、统计表和诊断信息
- explain: 每个字段的 keep/drop 判定树
"""

import json
from typing import Iterable

from rich.console import Console
from rich.json import JSON
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from fieldscope.core.paths import FieldPath
from fieldscope.core.plan import DecisionReason, FilterPlan
from fieldscope.core.walker import FieldVisit, FilterResult
from fieldscope.reporters.base import to_plain


# 判定原因的显示文字
REASON_LABELS = {
    DecisionReason.PASS_THROUGH: "no filter",
    DecisionReason.INCLUDED: "included",
    DecisionReason.UNDER_INCLUDE: "under include",
    DecisionReason.ANCESTOR_OF_INCLUDE: "ancestor of include",
    DecisionReason.NOT_INCLUDED: "not included",
    DecisionReason.EXCLUDED: "excluded",
    DecisionReason.NOT_EXCLUDED: "not excluded",
    DecisionReason.CYCLE: "cycle",
}


class RichReporter:
    """Rich 终端报告器"""

    def __init__(self, console: Console | None = None, indent: int = 2):
        self.console = console or Console()
        self.indent = indent

    def report(self, result: FilterResult, target: str) -> None:
        """生成 Rich 格式报告"""
        self.console.print()
        self.console.rule(f"[bold cyan]fieldscope[/bold cyan] [dim]{target}[/dim]")

        document = json.dumps(to_plain(result.value), ensure_ascii=False)
        self.console.print(JSON(document, indent=self.indent or 2))

        self._print_stats(result)
        if result.diagnostics:
            self._print_diagnostics(result)
        self.console.print()

    def explain(self, visits: Iterable[FieldVisit], plan: FilterPlan, target: str) -> None:
        """打印字段判定树"""
        header = Text()
        header.append(target, style="bold")
        header.append(f"  [{plan.mode.value}]", style="dim")
        tree = Tree(header)

        nodes: dict[FieldPath, Tree] = {}
        counts: dict[FieldPath, int] = {}
        labels: dict[FieldPath, FieldVisit] = {}

        for visit in visits:
            # Collection elements repeat their field's path; show it once
            if visit.path in nodes:
                counts[visit.path] += 1
                nodes[visit.path].label = self._label(visit, counts[visit.path])
                continue
            parent = nodes.get(visit.path.parent, tree)
            nodes[visit.path] = parent.add(self._label(visit, 1))
            counts[visit.path] = 1
            labels[visit.path] = visit

        self.console.print(tree)

        kept = sum(1 for v in labels.values() if v.kept)
        self.console.print(
            f"[dim]{len(labels)} distinct paths: "
            f"[green]{kept} kept[/green], [red]{len(labels) - kept} dropped[/red][/dim]"
        )

    def _label(self, visit: FieldVisit, count: int) -> Text:
        label = Text()
        if visit.kept:
            label.append("✓ ", style="green")
            label.append(visit.path.name, style="bold green" if visit.composite else "green")
        else:
            label.append("✗ ", style="red")
            label.append(visit.path.name, style="red strike")
        label.append(f"  {REASON_LABELS[visit.reason]}", style="dim")
        if count > 1:
            label.append(f"  ×{count}", style="dim cyan")
        return label

    def _print_stats(self, result: FilterResult) -> None:
        stats = result.stats
        table = Table(show_header=True, header_style="bold cyan", box=None)
        table.add_column("模式", style="cyan")
        table.add_column("访问", justify="right")
        table.add_column("保留", justify="right", style="green")
        table.add_column("移除", justify="right", style="red")
        table.add_column("清理", justify="right")
        table.add_column("最大深度", justify="right")
        table.add_row(
            result.mode.value,
            str(stats.visited),
            str(stats.kept),
            str(stats.dropped),
            str(stats.pruned),
            str(stats.max_depth),
        )
        self.console.print(table)

    def _print_diagnostics(self, result: FilterResult) -> None:
        lines = Text()
        for i, diagnostic in enumerate(result.diagnostics, 1):
            lines.append(f"{i}. {diagnostic.message}\n", style="yellow")
        self.console.print(Panel(
            lines,
            title=f"[bold yellow]⚠ {len(result.diagnostics)} cycle(s) detected[/bold yellow]",
            border_style="yellow",
        ))
