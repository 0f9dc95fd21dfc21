"""ユーティリティモジュール。"""

from .logger import setup_logging, resolve_log_level, FileProgressLogger

__all__ = ["setup_logging", "resolve_log_level", "FileProgressLogger"]
