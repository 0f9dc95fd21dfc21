"""バッチ処理とコマンドラインのテスト。"""

from pathlib import Path
from tempfile import TemporaryDirectory

from openpyxl import load_workbook

from objc_port_tools.config import Config
from objc_port_tools.main import FormatWarningPruner, main
from objc_port_tools.models.result import FileStatus
from objc_port_tools.postprocess.tag_processor import (
    DEFAULT_START_MARKER as S,
    DEFAULT_END_MARKER as E,
    DEFAULT_WARNING_PREFIX as W,
)

SAFE_SOURCE = f'{W}\nNSLog({S}@"Hello %@"{E}, name);\n'
SAFE_EXPECTED = 'NSLog(@"Hello %@", name);\n'
MALFORMED_SOURCE = f'{W}\nNSLog({S}@"Hello %@", name);\n'
PLAIN_SOURCE = "int main(void) { return 0; }\n"


def _make_tree(root: Path) -> None:
    (root / "Classes").mkdir()
    (root / "Classes" / "Good.m").write_text(SAFE_SOURCE)
    (root / "Classes" / "Broken.m").write_text(MALFORMED_SOURCE)
    (root / "Plain.c").write_text(PLAIN_SOURCE)
    (root / "notes.txt").write_text(SAFE_SOURCE)


class TestFormatWarningPruner:
    """FormatWarningPrunerのテスト。"""

    def test_process_directory(self):
        """ディレクトリを再帰的に処理し、失敗したファイルは書き換えない。"""
        with TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            _make_tree(root)

            pruner = FormatWarningPruner(Config())
            results = pruner.run([tmpdir])

            statuses = {Path(r.file_path).name: r.status for r in results}
            assert statuses == {
                "Good.m": FileStatus.MODIFIED,
                "Broken.m": FileStatus.FAILED,
                "Plain.c": FileStatus.UNCHANGED,
            }
            assert (root / "Classes" / "Good.m").read_text() == SAFE_EXPECTED
            assert (root / "Classes" / "Broken.m").read_text() == MALFORMED_SOURCE
            assert (root / "notes.txt").read_text() == SAFE_SOURCE

            assert pruner.stats.total == 3
            assert pruner.stats.modified == 1
            assert pruner.stats.failed == 1
            assert pruner.stats.warnings_removed == 1

    def test_failed_result_has_reason(self):
        """失敗したファイルの結果には理由が記録される。"""
        with TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "Broken.m"
            path.write_text(MALFORMED_SOURCE)

            result = FormatWarningPruner(Config()).process_file(str(path))

            assert result.status is FileStatus.FAILED
            assert not result.succeeded
            assert "START marker without matching END" in result.error

    def test_dry_run_does_not_write(self):
        """ドライランでは書き戻さない。"""
        with TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "Good.m"
            path.write_text(SAFE_SOURCE)

            result = FormatWarningPruner(Config(dry_run=True)).process_file(str(path))

            assert result.status is FileStatus.MODIFIED
            assert result.warnings_removed == 1
            assert path.read_text() == SAFE_SOURCE

    def test_explicit_file_with_any_extension(self):
        """明示的に指定したファイルは拡張子に関係なく処理する。"""
        with TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "snippet.txt"
            path.write_text(SAFE_SOURCE)

            results = FormatWarningPruner(Config()).run([str(path)])

            assert len(results) == 1
            assert path.read_text() == SAFE_EXPECTED

    def test_report_written(self):
        """Excelレポートが出力される。"""
        with TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            _make_tree(root)
            report = root / "reports" / "result.xlsx"

            FormatWarningPruner(Config(report_file=str(report))).run([str(root)])

            wb = load_workbook(report)
            assert wb.sheetnames == ["Results", "Summary"]
            ws = wb["Results"]
            assert ws.cell(row=1, column=1).value == "File"
            statuses = sorted(ws.cell(row=r, column=2).value for r in range(2, 5))
            assert statuses == ["failed", "modified", "unchanged"]
            summary = wb["Summary"]
            assert summary.cell(row=5, column=1).value == "modified"
            assert summary.cell(row=5, column=2).value == 1


class TestMain:
    """コマンドラインのテスト。"""

    def test_prune_success(self):
        """全ファイル成功時は終了コード0。"""
        with TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "Good.m"
            path.write_text(SAFE_SOURCE)

            assert main(["prune", str(path)]) == 0
            assert path.read_text() == SAFE_EXPECTED

    def test_prune_failure_exit_code(self):
        """失敗したファイルがあれば終了コード1、他のファイルは処理される。"""
        with TemporaryDirectory() as tmpdir:
            _make_tree(Path(tmpdir))

            assert main(["prune", tmpdir]) == 1
            assert (Path(tmpdir) / "Classes" / "Good.m").read_text() == SAFE_EXPECTED

    def test_prune_dry_run_flag(self):
        """--dry-runでは書き戻さない。"""
        with TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "Good.m"
            path.write_text(SAFE_SOURCE)

            assert main(["prune", "--dry-run", str(path)]) == 0
            assert path.read_text() == SAFE_SOURCE

    def test_missing_config_file(self):
        """指定した設定ファイルがない場合は終了コード1。"""
        with TemporaryDirectory() as tmpdir:
            missing = str(Path(tmpdir) / "missing.yaml")

            assert main(["prune", "-c", missing, tmpdir]) == 1

    def test_init_config(self):
        """--init-configで設定ファイルを生成する。"""
        with TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "config" / "generated.yaml"

            assert main(["prune", "--init-config", str(path)]) == 0

            config = Config.from_yaml(str(path))
            assert config.warning_prefix == W
