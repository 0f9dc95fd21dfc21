"""処理結果のExcelレポート出力モジュール。"""

from typing import Dict, List
from pathlib import Path
from datetime import datetime
import logging

from openpyxl import Workbook
from openpyxl.styles import PatternFill, Font, Alignment, Border, Side

from ..models.result import FileResult, FileStatus

logger = logging.getLogger(__name__)


class ReportWriter:
    """ファイルごとの処理結果をExcelファイルに書き込む。"""

    # 各処理状態の色（RGB hex、#なし）
    STATUS_COLORS: Dict[FileStatus, str] = {
        FileStatus.MODIFIED: "C6EFCE",   # 緑 - 書き換え済み
        FileStatus.UNCHANGED: "D9D9D9",  # 灰 - 変更なし
        FileStatus.FAILED: "FFC7CE",     # 赤 - 要確認
    }

    RESULT_HEADERS = ["File", "Status", "Regions", "Warnings kept", "Warnings removed", "Error"]
    COLUMN_WIDTHS = [60, 12, 10, 14, 16, 60]

    THIN_BORDER = Border(
        left=Side(style="thin"),
        right=Side(style="thin"),
        top=Side(style="thin"),
        bottom=Side(style="thin")
    )

    def __init__(self, output_file: str):
        """レポートライターを初期化する。

        Args:
            output_file: 出力Excelファイルのパス
        """
        self.output_file = Path(output_file)

    def write(self, results: List[FileResult]) -> None:
        """結果シートとサマリーシートを含むレポートを書き出す。

        Args:
            results: 全ファイルの処理結果
        """
        wb = Workbook()
        ws = wb.active
        ws.title = "Results"

        self._add_headers(ws)
        for row_num, result in enumerate(results, 2):
            self._write_result_row(ws, row_num, result)
        self._adjust_column_widths(ws)
        ws.freeze_panes = "A2"

        self._write_summary(wb.create_sheet("Summary"), results)

        self.output_file.parent.mkdir(parents=True, exist_ok=True)
        wb.save(self.output_file)
        logger.info(f"Report written to {self.output_file}")

    def _add_headers(self, ws) -> None:
        white_font = Font(bold=True, color="FFFFFF")
        header_fill = PatternFill(
            start_color="4472C4",
            end_color="4472C4",
            fill_type="solid"
        )

        for col, header in enumerate(self.RESULT_HEADERS, 1):
            cell = ws.cell(row=1, column=col)
            cell.value = header
            cell.font = white_font
            cell.fill = header_fill
            cell.alignment = Alignment(horizontal="center", vertical="center")
            cell.border = self.THIN_BORDER

    def _write_result_row(self, ws, row_num: int, result: FileResult) -> None:
        """1ファイル分の結果を書き込む。

        Args:
            ws: ワークシートオブジェクト
            row_num: 書き込む行番号
            result: 書き込む処理結果
        """
        for col, value in enumerate(result.to_row(), 1):
            cell = ws.cell(row=row_num, column=col)
            cell.value = value
            cell.border = self.THIN_BORDER
            if isinstance(value, int):
                cell.alignment = Alignment(horizontal="right")

        # 状態列は色分けする
        color = self.STATUS_COLORS[result.status]
        status_cell = ws.cell(row=row_num, column=2)
        status_cell.fill = PatternFill(
            start_color=color,
            end_color=color,
            fill_type="solid"
        )
        status_cell.alignment = Alignment(horizontal="center")

        error_cell = ws.cell(row=row_num, column=6)
        error_cell.alignment = Alignment(wrap_text=True, vertical="top")

    def _adjust_column_widths(self, ws) -> None:
        for col, width in enumerate(self.COLUMN_WIDTHS, 1):
            col_letter = ws.cell(row=1, column=col).column_letter
            ws.column_dimensions[col_letter].width = width

    def _write_summary(self, ws, results: List[FileResult]) -> None:
        """状態ごとの件数を集計したサマリーシートを書き込む。

        Args:
            ws: サマリー用のワークシート
            results: 全ファイルの処理結果
        """
        total = len(results)
        counts: Dict[FileStatus, int] = {status: 0 for status in FileStatus}
        for result in results:
            counts[result.status] += 1

        ws["A1"] = "Format warning post-processing summary"
        ws["A1"].font = Font(bold=True, size=14)
        ws.merge_cells("A1:C1")

        ws["A2"] = f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}"
        ws.merge_cells("A2:C2")

        for col, header in enumerate(["Status", "Files", "Ratio"], 1):
            cell = ws.cell(row=4, column=col)
            cell.value = header
            cell.font = Font(bold=True)
            cell.border = self.THIN_BORDER
            cell.alignment = Alignment(horizontal="center")

        row = 5
        for status, count in counts.items():
            cell_status = ws.cell(row=row, column=1)
            cell_status.value = status.value
            cell_status.fill = PatternFill(
                start_color=self.STATUS_COLORS[status],
                end_color=self.STATUS_COLORS[status],
                fill_type="solid"
            )
            cell_status.border = self.THIN_BORDER

            cell_count = ws.cell(row=row, column=2)
            cell_count.value = count
            cell_count.alignment = Alignment(horizontal="right")
            cell_count.border = self.THIN_BORDER

            cell_pct = ws.cell(row=row, column=3)
            cell_pct.value = f"{count / total * 100:.1f}%" if total > 0 else "0%"
            cell_pct.alignment = Alignment(horizontal="right")
            cell_pct.border = self.THIN_BORDER

            row += 1

        removed = sum(r.warnings_removed for r in results)
        ws.cell(row=row, column=1).value = "Total"
        ws.cell(row=row, column=1).font = Font(bold=True)
        ws.cell(row=row, column=2).value = total
        ws.cell(row=row, column=2).font = Font(bold=True)
        ws.cell(row=row + 2, column=1).value = "Warnings removed"
        ws.cell(row=row + 2, column=2).value = removed

        ws.column_dimensions["A"].width = 18
        ws.column_dimensions["B"].width = 10
        ws.column_dimensions["C"].width = 10
