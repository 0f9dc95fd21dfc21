"""設定管理モジュール。"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional, Any
from pathlib import Path
import os
import logging

import yaml

from .postprocess.format_checker import DEFAULT_CONSTANT_STRING_MACRO
from .postprocess.tag_processor import (
    DEFAULT_START_MARKER,
    DEFAULT_END_MARKER,
    DEFAULT_WARNING_PREFIX,
)

logger = logging.getLogger(__name__)

LOG_LEVEL_ENV = "OBJC_PORT_TOOLS_LOG_LEVEL"

_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Config:
    """アプリケーション設定。"""

    # 上流の移植ツールが挿入するマーカーと警告コメント
    start_marker: str = DEFAULT_START_MARKER
    end_marker: str = DEFAULT_END_MARKER
    warning_prefix: str = DEFAULT_WARNING_PREFIX

    # リテラルとみなす定数文字列マクロ
    constant_string_macro: str = DEFAULT_CONSTANT_STRING_MACRO

    # ディレクトリ走査時の対象拡張子
    source_extensions: List[str] = field(
        default_factory=lambda: [".m", ".mm", ".h", ".c", ".cpp"]
    )

    # 処理設定
    dry_run: bool = False  # 差分をログに出すだけで書き戻さない
    report_file: Optional[str] = None  # Excelレポートの出力先

    # ロギング設定
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @classmethod
    def from_yaml(cls, file_path: str) -> "Config":
        """YAMLファイルから設定を読み込む。

        Args:
            file_path: YAML設定ファイルのパス

        Returns:
            Configインスタンス
        """
        with open(file_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        config = cls.from_dict(data)

        # ログレベルは環境変数が優先
        config.log_level = os.getenv(LOG_LEVEL_ENV, config.log_level)

        logger.info(f"Configuration loaded from {file_path}")
        return config

    @classmethod
    def from_dict(cls, data: dict) -> "Config":
        """辞書から設定を作成する。未知のキーは警告して無視する。

        Args:
            data: 設定辞書

        Returns:
            Configインスタンス
        """
        config = cls()

        for key, value in data.items():
            if hasattr(config, key):
                setattr(config, key, value)
            else:
                logger.warning(f"Unknown configuration key ignored: {key}")

        return config

    def validate(self) -> List[str]:
        """設定を検証する。

        Returns:
            検証エラーのリスト（有効な場合は空）
        """
        errors = []

        if not self.start_marker:
            errors.append("start_marker must not be empty")
        if not self.end_marker:
            errors.append("end_marker must not be empty")
        if self.start_marker and self.start_marker == self.end_marker:
            errors.append("start_marker and end_marker must differ")
        if not self.warning_prefix:
            errors.append("warning_prefix must not be empty")
        if not self.constant_string_macro:
            errors.append("constant_string_macro must not be empty")

        for ext in self.source_extensions:
            if not str(ext).startswith("."):
                errors.append(f"source extension must start with '.': {ext}")

        if str(self.log_level).upper() not in _VALID_LOG_LEVELS:
            errors.append(f"invalid log_level: {self.log_level}")

        if self.report_file and Path(self.report_file).suffix != ".xlsx":
            logger.warning(f"Report file does not end in .xlsx: {self.report_file}")

        return errors

    def to_dict(self) -> Dict[str, Any]:
        """設定を辞書に変換する。

        Returns:
            辞書形式の設定
        """
        return {
            "start_marker": self.start_marker,
            "end_marker": self.end_marker,
            "warning_prefix": self.warning_prefix,
            "constant_string_macro": self.constant_string_macro,
            "source_extensions": list(self.source_extensions),
            "dry_run": self.dry_run,
            "report_file": self.report_file,
            "log_level": self.log_level,
            "log_file": self.log_file,
        }

    def save_yaml(self, file_path: str) -> None:
        """設定をYAMLファイルに保存。

        Args:
            file_path: 保存先パス
        """
        output_path = Path(file_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        data = self.to_dict()
        # 未設定の項目は出力しない
        for key in ("report_file", "log_file"):
            if not data[key]:
                del data[key]

        with open(file_path, "w", encoding="utf-8") as f:
            yaml.dump(
                data,
                f,
                default_flow_style=False,
                allow_unicode=True,
                sort_keys=False
            )

        logger.info(f"Configuration saved to {file_path}")
