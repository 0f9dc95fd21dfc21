"""コマンドライン実行用のロギング設定。"""

import logging
import sys
from pathlib import Path
from typing import Optional

from ..models.result import FileResult

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# レポート出力ライブラリのログは警告以上のみ
QUIET_LOGGERS = ("openpyxl",)


def resolve_log_level(level: str, verbose: bool = False) -> int:
    """設定値と -v 指定からログレベルを決める。

    Args:
        level: 設定ファイルのログレベル名
        verbose: -v/--verbose が指定されたかどうか

    Returns:
        loggingのレベル値（不明な名前はINFO）
    """
    if verbose:
        return logging.DEBUG
    resolved = logging.getLevelName(str(level).upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    verbose: bool = False
) -> logging.Logger:
    """ルートロガーに標準出力と（指定時は）ファイルのハンドラーを設定する。

    ドライランの差分もログとして標準出力に出る。

    Args:
        level: ログレベル名
        log_file: ログファイルへのパス（省略可）
        verbose: Trueの場合はlevelに関係なくDEBUG

    Returns:
        ルートロガー
    """
    log_level = resolve_log_level(level, verbose)
    formatter = logging.Formatter(LOG_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    # サブコマンドを同一プロセスで繰り返し実行しても二重出力しない
    root_logger.handlers.clear()

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    for handler in handlers:
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))

    return root_logger


class FileProgressLogger:
    """ファイルごとの処理結果を進捗としてログ出力する。

    各ファイルの結果はDEBUGで、全体の進捗は一定件数ごとにINFOで出力する。
    """

    def __init__(
        self,
        total: int,
        logger: Optional[logging.Logger] = None,
        log_interval: int = 50
    ):
        self.total = total
        self.current = 0
        self.logger = logger or logging.getLogger(__name__)
        self.log_interval = log_interval

    def update(self, result: FileResult) -> None:
        """1ファイル分の結果を記録する。

        Args:
            result: 処理し終えたファイルの結果
        """
        self.current += 1
        self.logger.debug(f"[{self.current}/{self.total}] {result}")

        if self.current % self.log_interval == 0 or self.current == self.total:
            progress = self.current / self.total * 100 if self.total else 100.0
            self.logger.info(
                f"Progress: {self.current}/{self.total} files ({progress:.1f}%)"
            )
