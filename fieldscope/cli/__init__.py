"""
CLI Layer - 命令行接口层

提供 filter / explain / paths / version 命令。
"""

from fieldscope.cli.app import app, filter_command, explain, paths, version, load_document

__all__ = [
    "app",
    "filter_command",
    "explain",
    "paths",
    "version",
    "load_document",
]
