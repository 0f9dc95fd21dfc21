"""Objective-C 64ビット移植支援ツールのメインエントリーポイント。"""

import argparse
import os
import sys
from pathlib import Path
from typing import List, Optional
import logging

from .config import Config, LOG_LEVEL_ENV
from .consts.extractor import ConstantExtractor
from .consts.generator import ConstantsGenerator
from .io.report_writer import ReportWriter
from .io.source_files import (
    collect_source_files,
    read_source,
    write_source,
    unified_diff,
)
from .models.result import FileResult, FileStatus, ProcessingStats
from .postprocess.format_checker import FormatChecker
from .postprocess.tag_processor import TagProcessor, MalformedMarkerError
from .utils.logger import setup_logging, FileProgressLogger

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config/default_config.yaml"


class FormatWarningPruner:
    """書式警告の後処理をファイル単位で実行するバッチ処理クラス。"""

    def __init__(self, config: Config):
        """バッチ処理を初期化する。

        Args:
            config: アプリケーション設定
        """
        self.config = config
        self.stats = ProcessingStats()
        self.processor = TagProcessor(
            start_marker=config.start_marker,
            end_marker=config.end_marker,
            warning_prefix=config.warning_prefix,
            checker=FormatChecker(config.constant_string_macro)
        )

    def run(self, paths: List[str]) -> List[FileResult]:
        """指定されたファイル・ディレクトリを処理する。

        1ファイルの失敗は他のファイルの処理を妨げない。

        Args:
            paths: 処理対象のファイルまたはディレクトリ

        Returns:
            ファイルごとの処理結果
        """
        files = collect_source_files(paths, self.config.source_extensions)
        logger.info(f"Processing {len(files)} files")

        results = []
        progress = FileProgressLogger(len(files), logger, log_interval=50)

        for file_path in files:
            result = self.process_file(file_path)
            results.append(result)
            self.stats.record(result)
            progress.update(result)

        if self.config.report_file:
            ReportWriter(self.config.report_file).write(results)

        self._log_statistics()
        return results

    def process_file(self, file_path: str) -> FileResult:
        """1ファイルを処理し、変更があれば書き戻す。

        Args:
            file_path: 処理するファイルのパス

        Returns:
            処理結果
        """
        # 読み込みと変換
        try:
            original = read_source(file_path)
            processed, summary = self.processor.process_with_summary(original)
        except MalformedMarkerError as e:
            logger.error(f"{file_path}: malformed markers, file left unmodified: {e}")
            return FileResult(file_path, FileStatus.FAILED, error=str(e))
        except (OSError, UnicodeError) as e:
            logger.error(f"{file_path}: cannot read: {e}")
            return FileResult(file_path, FileStatus.FAILED, error=str(e))

        result = FileResult(
            file_path,
            FileStatus.UNCHANGED,
            regions=summary.regions,
            warnings_kept=summary.warnings_kept,
            warnings_removed=summary.warnings_removed
        )
        if processed == original:
            return result

        result.status = FileStatus.MODIFIED
        # ドライランでは差分を表示するだけ
        if self.config.dry_run:
            logger.info(f"{file_path}: would be modified\n"
                        f"{unified_diff(file_path, original, processed)}")
            return result

        # 書き戻し
        try:
            write_source(file_path, processed)
        except OSError as e:
            logger.error(f"{file_path}: cannot write: {e}")
            result.status = FileStatus.FAILED
            result.error = str(e)

        return result

    def _log_statistics(self) -> None:
        """処理統計をログ出力する。"""
        logger.info("=" * 50)
        logger.info("Processing Statistics:")
        logger.info(f"  Total files: {self.stats.total}")
        logger.info(f"  Modified: {self.stats.modified}")
        logger.info(f"  Unchanged: {self.stats.unchanged}")
        logger.info(f"  Failed: {self.stats.failed}")
        logger.info(f"  Warnings removed: {self.stats.warnings_removed}")
        logger.info("=" * 50)


def build_parser() -> argparse.ArgumentParser:
    """コマンドライン引数のパーサーを構築する。"""
    parser = argparse.ArgumentParser(
        prog="objc-port-tools",
        description="Objective-C 64ビット移植支援のソース変換ツール"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    prune = subparsers.add_parser(
        "prune",
        help="移植ツールが付けたマーカーを除去し、不要な書式警告を削除する"
    )
    prune.add_argument(
        "paths",
        nargs="*",
        help="処理するファイルまたはディレクトリ"
    )
    prune.add_argument(
        "-c", "--config",
        help=f"設定ファイルパス（既定: {DEFAULT_CONFIG_PATH} があれば使用）"
    )
    prune.add_argument(
        "-n", "--dry-run",
        action="store_true",
        help="書き戻さずに差分だけを表示する"
    )
    prune.add_argument(
        "-r", "--report",
        help="処理結果のExcelレポート出力先"
    )
    prune.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="詳細ログを有効にする"
    )
    prune.add_argument(
        "--init-config",
        metavar="CONFIG_PATH",
        help="既定値の設定ファイルを生成する"
    )

    consts = subparsers.add_parser(
        "consts",
        help="JavaScriptの指定付き定数からCのヘッダーと実装ファイルを生成する"
    )
    consts.add_argument(
        "output",
        help="出力ファイルのパス（拡張子 .h / .c を含まない）"
    )
    consts.add_argument(
        "inputs",
        nargs="+",
        help="入力JavaScriptファイル"
    )
    consts.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="詳細ログを有効にする"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """メインエントリーポイント。

    Args:
        argv: コマンドライン引数（省略時はsys.argv）

    Returns:
        終了コード
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "consts":
        return _export_constants(args.output, args.inputs, args.verbose)

    # 設定ファイル生成モード
    if args.init_config:
        setup_logging(verbose=args.verbose)
        Config().save_yaml(args.init_config)
        print(f"設定ファイルを生成しました: {args.init_config}")
        return 0

    if not args.paths:
        parser.error("prune requires at least one file or directory")

    # 設定を読み込み
    config = _load_config(args.config)
    if config is None:
        return 1

    # コマンドライン引数で上書き
    if args.dry_run:
        config.dry_run = True
    if args.report:
        config.report_file = args.report

    # ロギングをセットアップ
    setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        verbose=args.verbose
    )

    # 設定を検証
    errors = config.validate()
    if errors:
        for error in errors:
            logger.error(f"Configuration error: {error}")
        return 1

    # 後処理を実行
    try:
        pruner = FormatWarningPruner(config)
        results = pruner.run(args.paths)
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        return 1

    return 0 if all(r.succeeded for r in results) else 1


def _load_config(config_path: Optional[str]) -> Optional[Config]:
    """設定ファイルを読み込む。

    明示的に指定されたファイルが存在しない場合はエラーとする。
    未指定の場合は既定パスがあれば読み込み、なければ既定値を使う。

    Args:
        config_path: 設定ファイルのパス（省略可）

    Returns:
        Config、読み込みに失敗した場合はNone
    """
    if config_path is None:
        if Path(DEFAULT_CONFIG_PATH).exists():
            return Config.from_yaml(DEFAULT_CONFIG_PATH)
        config = Config()
        config.log_level = os.getenv(LOG_LEVEL_ENV, config.log_level)
        return config

    if not Path(config_path).exists():
        print(f"Error: 設定ファイルが見つかりません: {config_path}")
        return None

    return Config.from_yaml(config_path)


def _export_constants(output: str, inputs: List[str], verbose: bool) -> int:
    """JavaScriptファイルから定数を抽出し、.h と .c を生成する。

    Args:
        output: 出力ファイルのパス（拡張子なし）
        inputs: 入力JavaScriptファイル
        verbose: 詳細ログを有効にするかどうか

    Returns:
        終了コード
    """
    setup_logging(verbose=verbose)

    extractor = ConstantExtractor()
    constants = extractor.extract_files(inputs)

    try:
        generator = ConstantsGenerator(output, extractor.source_files)
        generator.write(constants)
    except OSError as e:
        logger.error(f"Cannot write constants to {output}: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
