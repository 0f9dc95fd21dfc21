"""ファイル単位の処理結果モデル。"""

from dataclasses import dataclass
from typing import Optional
from enum import Enum
import os


class FileStatus(Enum):
    """ファイルの処理状態。"""
    MODIFIED = "modified"      # 変換結果が元ファイルと異なる
    UNCHANGED = "unchanged"    # 変換の必要なし
    FAILED = "failed"          # マーカー不正またはI/Oエラー


@dataclass
class FileResult:
    """1ファイル分の処理結果。"""
    file_path: str
    status: FileStatus
    regions: int = 0
    warnings_kept: int = 0
    warnings_removed: int = 0
    error: Optional[str] = None

    def __post_init__(self):
        self.file_path = os.path.normpath(self.file_path)

    @property
    def succeeded(self) -> bool:
        return self.status is not FileStatus.FAILED

    def to_row(self) -> list:
        """レポート出力用の行に変換する。

        Returns:
            レポート列の値のリスト
        """
        return [
            self.file_path,
            self.status.value,
            self.regions,
            self.warnings_kept,
            self.warnings_removed,
            self.error or "",
        ]

    def __str__(self) -> str:
        if self.error:
            return f"{self.file_path}: {self.status.value} ({self.error})"
        return (
            f"{self.file_path}: {self.status.value} "
            f"(regions: {self.regions}, removed: {self.warnings_removed})"
        )


@dataclass
class ProcessingStats:
    """バッチ処理の統計情報。"""
    total: int = 0
    modified: int = 0
    unchanged: int = 0
    failed: int = 0
    warnings_removed: int = 0

    def record(self, result: FileResult) -> None:
        """1ファイルの結果を集計に加える。

        Args:
            result: 集計するファイル結果
        """
        self.total += 1
        if result.status is FileStatus.MODIFIED:
            self.modified += 1
        elif result.status is FileStatus.UNCHANGED:
            self.unchanged += 1
        else:
            self.failed += 1
        self.warnings_removed += result.warnings_removed
