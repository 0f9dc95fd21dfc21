"""ファイル入出力モジュール。"""

from .source_files import collect_source_files, read_source, write_source, unified_diff
from .report_writer import ReportWriter

__all__ = [
    "collect_source_files",
    "read_source",
    "write_source",
    "unified_diff",
    "ReportWriter",
]
