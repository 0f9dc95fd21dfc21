"""ロギング設定と進捗出力のテスト。"""

import logging
from pathlib import Path
from tempfile import TemporaryDirectory

import pytest

from objc_port_tools.models.result import FileResult, FileStatus
from objc_port_tools.utils.logger import (
    FileProgressLogger,
    resolve_log_level,
    setup_logging,
)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("openpyxl").setLevel(logging.NOTSET)


class TestResolveLogLevel:
    """ログレベル決定のテスト。"""

    @pytest.mark.parametrize("level, verbose, expected", [
        ("DEBUG", False, logging.DEBUG),
        ("warning", False, logging.WARNING),
        ("LOUD", False, logging.INFO),
        ("ERROR", True, logging.DEBUG),
    ])
    def test_levels(self, level, verbose, expected):
        """設定値と-v指定の組み合わせのテスト。"""
        assert resolve_log_level(level, verbose) == expected


class TestSetupLogging:
    """setup_loggingのテスト。"""

    def test_log_file_written(self, restore_root_logger):
        """ログファイルのディレクトリを作成して書き込む。"""
        with TemporaryDirectory() as tmpdir:
            log_file = Path(tmpdir) / "logs" / "run.log"

            root = setup_logging("INFO", str(log_file))
            logging.getLogger("objc_port_tools.sample").info("pruned Foo.m")
            logging.getLogger("objc_port_tools.sample").debug("not shown")
            for handler in root.handlers:
                handler.flush()

            text = log_file.read_text(encoding="utf-8")
            assert "INFO - pruned Foo.m" in text
            assert "not shown" not in text

            for handler in root.handlers:
                handler.close()

    def test_handlers_not_duplicated(self, restore_root_logger):
        """繰り返し呼び出してもハンドラーは増えない。"""
        setup_logging("INFO")
        root = setup_logging("INFO")

        assert len(root.handlers) == 1

    def test_verbose_keeps_openpyxl_quiet(self, restore_root_logger):
        """詳細ログでもopenpyxlのログは警告以上のみ。"""
        root = setup_logging("INFO", verbose=True)

        assert root.level == logging.DEBUG
        assert logging.getLogger("openpyxl").level == logging.WARNING


class TestFileProgressLogger:
    """FileProgressLoggerのテスト。"""

    def test_progress_messages(self, caplog):
        """ファイルごとの結果はDEBUG、進捗は間隔ごとと最後にINFO。"""
        logger = logging.getLogger("objc_port_tools.progress_sample")
        caplog.set_level(logging.DEBUG, logger=logger.name)
        progress = FileProgressLogger(3, logger, log_interval=2)

        progress.update(FileResult(
            "a.m", FileStatus.MODIFIED, regions=2, warnings_removed=1
        ))
        progress.update(FileResult("b.m", FileStatus.FAILED, error="boom"))
        progress.update(FileResult("c.m", FileStatus.UNCHANGED))

        debug = [r.getMessage() for r in caplog.records if r.levelno == logging.DEBUG]
        info = [r.getMessage() for r in caplog.records if r.levelno == logging.INFO]
        assert debug == [
            "[1/3] a.m: modified (regions: 2, removed: 1)",
            "[2/3] b.m: failed (boom)",
            "[3/3] c.m: unchanged (regions: 0, removed: 0)",
        ]
        assert info == [
            "Progress: 2/3 files (66.7%)",
            "Progress: 3/3 files (100.0%)",
        ]
        assert progress.current == 3
