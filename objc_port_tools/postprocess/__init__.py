"""64ビット移植後の書式警告後処理モジュール。"""

from .format_checker import FormatChecker
from .tag_processor import (
    TagProcessor,
    MalformedMarkerError,
    ProcessingSummary,
    DEFAULT_START_MARKER,
    DEFAULT_END_MARKER,
    DEFAULT_WARNING_PREFIX,
)

__all__ = [
    "FormatChecker",
    "TagProcessor",
    "MalformedMarkerError",
    "ProcessingSummary",
    "DEFAULT_START_MARKER",
    "DEFAULT_END_MARKER",
    "DEFAULT_WARNING_PREFIX",
]
