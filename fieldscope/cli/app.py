"""
CLI 入口模块 - 使用 Typer 构建命令行界面

过滤流程：
1. 加载配置
2. 解析 include/exclude 规格
3. 读取输入文档（JSON 或 YAML）
4. 遍历并过滤
5. 输出结果
"""

import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

import typer
import yaml
from rich.console import Console
from rich.logging import RichHandler

from fieldscope.config import FilterConfig, load_config
from fieldscope.core import FilterPlan, build_plan, filter_value, iter_decisions
from fieldscope.errors import ConfigError, InvalidPathError, MaxDepthExceeded
from fieldscope.reporters import JsonReporter, RichReporter, YamlReporter

# 创建 Typer 应用实例
app = typer.Typer(
    name="fieldscope",
    help="fieldscope: include/exclude field filtering for JSON and YAML documents.",
    add_completion=False,
)

# Rich Console 用于输出；错误和诊断走 stderr，保证 stdout 可被管道消费
console = Console()
err_console = Console(stderr=True)


def _setup_logging(verbose: bool) -> None:
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def load_document(target: str) -> Any:
    """
    读取输入文档

    Args:
        target: 文件路径，"-" 表示从 stdin 读取 JSON

    Returns:
        解码后的值
    """
    if target == "-":
        return json.load(sys.stdin)

    path = Path(target)
    if not path.exists():
        raise FileNotFoundError(f"Path does not exist: {target}")
    if not path.is_file():
        raise IsADirectoryError(f"Path is not a file: {target}")

    with open(path, encoding="utf-8") as f:
        if path.suffix.lower() in (".yaml", ".yml"):
            return yaml.safe_load(f)
        return json.load(f)


def _read_or_exit(target: str, verbose: bool) -> Any:
    if verbose:
        err_console.print(f"[dim]Reading {target}[/dim]")
    try:
        return load_document(target)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
        err_console.print(f"[red]Error:[/red] Failed to read input: {e}")
        raise typer.Exit(1)


def _config_or_exit(config_path: Optional[Path], **overrides: Any) -> FilterConfig:
    try:
        return load_config(config_path).merge(**overrides)
    except ConfigError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)


def _plan_or_exit(include: Optional[List[str]], exclude: Optional[List[str]]) -> FilterPlan:
    try:
        return build_plan(include, exclude)
    except InvalidPathError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)


@app.command("filter")
def filter_command(
    target: str = typer.Argument(
        ...,
        help="JSON or YAML file to filter ('-' reads JSON from stdin)",
    ),
    include: Optional[List[str]] = typer.Option(
        None,
        "--include",
        "-i",
        help="Comma-separated dotted paths to keep (repeatable)",
    ),
    exclude: Optional[List[str]] = typer.Option(
        None,
        "--exclude",
        "-e",
        help="Comma-separated dotted paths to drop (repeatable)",
    ),
    prune: Optional[bool] = typer.Option(
        None,
        "--prune/--no-prune",
        help="Remove objects and lists left empty by filtering",
    ),
    max_depth: Optional[int] = typer.Option(
        None,
        "--max-depth",
        help="Maximum nesting depth",
    ),
    format: Optional[str] = typer.Option(
        None,
        "--format",
        "-f",
        help="Output format: json (default), yaml or rich",
    ),
    meta: bool = typer.Option(
        False,
        "--meta",
        help="Wrap JSON output with mode, stats and diagnostics",
    ),
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Config file (.toml or .yaml)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show detailed output",
    ),
) -> None:
    """
    Filter a document down to the requested fields.

    Examples:
        fieldscope filter account.json -i accountNumber
        fieldscope filter account.json -i transactions.transactionId -e meta
        fieldscope filter account.yaml -e meta --format yaml
        cat account.json | fieldscope filter - -i accountNumber,accountType
    """
    _setup_logging(verbose)

    # 1. 加载配置
    config = _config_or_exit(
        config_path,
        prune_empty=prune,
        max_depth=max_depth,
        output_format=format,
    )
    if verbose and config.source:
        err_console.print(f"[dim]Using config: {config.source}[/dim]")

    # 2. 解析规格（语法错误时不做任何过滤）
    plan = _plan_or_exit(include, exclude)
    if verbose:
        err_console.print(f"[dim]Mode: {plan.mode.value}[/dim]")
        err_console.print(f"[dim]  - include: {plan.include or '-'}[/dim]")
        err_console.print(f"[dim]  - exclude: {plan.exclude or '-'}[/dim]")

    # 3. 读取输入
    document = _read_or_exit(target, verbose)

    # 4. 过滤
    try:
        result = filter_value(
            document,
            plan=plan,
            prune=config.prune_empty,
            max_depth=config.max_depth,
        )
    except MaxDepthExceeded as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if verbose:
        stats = result.stats
        err_console.print(
            f"[dim]  - {stats.visited} fields visited, {stats.kept} kept, "
            f"{stats.dropped} dropped, {stats.pruned} pruned[/dim]"
        )

    # 5. 输出
    if config.output_format == "rich":
        RichReporter(console, indent=config.indent).report(result, target)
    else:
        if config.output_format == "yaml":
            reporter = YamlReporter(indent=config.indent)
        else:
            reporter = JsonReporter(indent=config.indent, with_meta=meta)
        reporter.report(result, target)
        for diagnostic in result.diagnostics:
            err_console.print(f"[yellow]Warning:[/yellow] {diagnostic.message}")


@app.command()
def explain(
    target: str = typer.Argument(
        ...,
        help="JSON or YAML file to inspect ('-' reads JSON from stdin)",
    ),
    include: Optional[List[str]] = typer.Option(
        None, "--include", "-i", help="Comma-separated dotted paths to keep",
    ),
    exclude: Optional[List[str]] = typer.Option(
        None, "--exclude", "-e", help="Comma-separated dotted paths to drop",
    ),
    max_depth: Optional[int] = typer.Option(
        None, "--max-depth", help="Maximum nesting depth",
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Config file (.toml or .yaml)",
    ),
) -> None:
    """Show the keep/drop decision and its reason for every field."""
    config = _config_or_exit(config_path, max_depth=max_depth)
    plan = _plan_or_exit(include, exclude)
    document = _read_or_exit(target, verbose=False)

    try:
        visits = list(iter_decisions(document, plan=plan, max_depth=config.max_depth))
    except MaxDepthExceeded as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    RichReporter(console).explain(visits, plan, target)


@app.command()
def paths(
    target: str = typer.Argument(
        ...,
        help="JSON or YAML file to inspect ('-' reads JSON from stdin)",
    ),
    max_depth: Optional[int] = typer.Option(
        None, "--max-depth", help="Maximum nesting depth",
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Config file (.toml or .yaml)",
    ),
) -> None:
    """List every field path in a document, usable with --include/--exclude."""
    config = _config_or_exit(config_path, max_depth=max_depth)
    document = _read_or_exit(target, verbose=False)

    seen = set()
    try:
        for visit in iter_decisions(document, max_depth=config.max_depth):
            if visit.path not in seen:
                seen.add(visit.path)
                typer.echo(str(visit.path))
    except MaxDepthExceeded as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def version() -> None:
    """Show the version of fieldscope."""
    from fieldscope import __version__
    console.print(f"[bold]fieldscope[/bold] v{__version__}")


if __name__ == "__main__":
    app()
