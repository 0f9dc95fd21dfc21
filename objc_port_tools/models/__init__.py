"""Data models for the source rewriting tools."""

from .result import FileResult, FileStatus, ProcessingStats
from .constant import ConstantDefinition

__all__ = [
    "FileResult",
    "FileStatus",
    "ProcessingStats",
    "ConstantDefinition",
]
