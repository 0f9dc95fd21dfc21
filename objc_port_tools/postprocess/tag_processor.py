"""64ビット移植後の書式警告タグ後処理。

上流の移植ツールは書式文字列として使われる式をSTART/ENDマーカーで囲み、
安全性を証明できなかった箇所の前に警告コメント行を挿入する。
このモジュールはマーカーを取り除き、不要と判定できた警告行を削除する。
"""

from dataclasses import dataclass
from typing import Optional, Tuple
import re
import logging

from .format_checker import FormatChecker, DEFAULT_CONSTANT_STRING_MACRO

logger = logging.getLogger(__name__)

DEFAULT_START_MARKER = "/*<64BIT-FORMAT>*/"
DEFAULT_END_MARKER = "/*</64BIT-FORMAT>*/"
DEFAULT_WARNING_PREFIX = "#warning 64BIT: Check formatting arguments"

_LEADING_BLANK_LINES = re.compile(r"\A(?:[ \t]*\r?\n)+")


class MalformedMarkerError(ValueError):
    """START/ENDマーカーの対応が取れていない。"""

    def __init__(self, message: str, offset: int):
        super().__init__(f"{message} at offset {offset}")
        self.offset = offset


@dataclass
class ProcessingSummary:
    """1回の処理の集計。

    Attributes:
        regions: 処理した領域の数
        warnings_kept: 警告を残すと判定した領域の数
        warnings_removed: 実際に削除した警告行の数
    """
    regions: int = 0
    warnings_kept: int = 0
    warnings_removed: int = 0


class _OutputBuffer:
    """出力テキストと、削除候補となる直近の警告行の位置を保持する。

    削除候補は警告行を出力するたびに更新され、削除したとき、
    残すと判定したとき、および入れ子の領域に入るときに破棄される。
    """

    def __init__(self, warning_prefix: str):
        self.text = ""
        self._warning_line = re.compile(
            r"^[ \t]*" + re.escape(warning_prefix) + r"[^\n]*\n",
            re.MULTILINE
        )
        self._pending: Optional[int] = None
        # 警告行の走査が済んでいない最初の行の開始位置
        self._unscanned = 0

    def append(self, chunk: str) -> None:
        if not chunk:
            return
        self.text += chunk
        end = self.text.rfind("\n") + 1
        if end <= self._unscanned:
            return
        for match in self._warning_line.finditer(self.text, self._unscanned, end):
            self._pending = match.start()
        self._unscanned = end

    def forget_warning(self) -> None:
        self._pending = None

    def remove_last_warning(self) -> bool:
        """直近に出力した警告行を改行ごと削除する。

        Returns:
            削除した場合True、削除候補がなければFalse
        """
        if self._pending is None:
            return False
        start = self._pending
        end = self.text.index("\n", start) + 1
        self.text = self.text[:start] + self.text[end:]
        self._unscanned -= end - start
        self._pending = None
        return True


class TagProcessor:
    """マーカー付きソーステキストを走査し、警告行を取捨選択する。"""

    def __init__(
        self,
        start_marker: str = DEFAULT_START_MARKER,
        end_marker: str = DEFAULT_END_MARKER,
        warning_prefix: str = DEFAULT_WARNING_PREFIX,
        checker: Optional[FormatChecker] = None
    ):
        """タグプロセッサーを初期化する。

        Args:
            start_marker: 領域開始マーカー
            end_marker: 領域終了マーカー
            warning_prefix: 警告コメント行の固定プレフィックス
            checker: リーフ領域の判定器（省略時はCFSTRをマクロとする既定値）
        """
        if not start_marker or not end_marker:
            raise ValueError("start_marker and end_marker must not be empty")
        if start_marker == end_marker:
            raise ValueError("start_marker and end_marker must differ")

        self.start_marker = start_marker
        self.end_marker = end_marker
        self.warning_prefix = warning_prefix
        self.checker = checker or FormatChecker(DEFAULT_CONSTANT_STRING_MACRO)

    def process(self, text: str) -> str:
        """マーカーを除去し、不要な警告行を削除したテキストを返す。

        Args:
            text: 上流ツールで注釈済みのソーステキスト

        Returns:
            変換後のテキスト

        Raises:
            MalformedMarkerError: マーカーの対応が取れていない場合
        """
        return self.process_with_summary(text)[0]

    def process_with_summary(self, text: str) -> Tuple[str, ProcessingSummary]:
        """process()と同じ変換を行い、集計も返す。

        Args:
            text: 上流ツールで注釈済みのソーステキスト

        Returns:
            (変換後のテキスト, ProcessingSummary) のタプル

        Raises:
            MalformedMarkerError: マーカーの対応が取れていない場合
        """
        out = _OutputBuffer(self.warning_prefix)
        summary = ProcessingSummary()
        pos = 0

        while True:
            start = text.find(self.start_marker, pos)
            end = text.find(self.end_marker, pos)

            if start != -1 and (end == -1 or start < end):
                out.append(text[pos:start])
                pos = self._process_region(
                    text, start + len(self.start_marker), out, summary
                )
            elif end != -1:
                raise MalformedMarkerError("END marker without matching START", end)
            else:
                out.append(text[pos:])
                break

        result = _LEADING_BLANK_LINES.sub("", out.text)
        logger.debug(
            f"Processed {summary.regions} regions: "
            f"{summary.warnings_removed} warnings removed, "
            f"{summary.warnings_kept} kept"
        )
        return result, summary

    def _process_region(
        self,
        text: str,
        pos: int,
        out: _OutputBuffer,
        summary: ProcessingSummary
    ) -> int:
        """START直後から対応するENDまでを処理する。

        Args:
            text: 入力テキスト全体
            pos: START マーカー直後の位置
            out: 出力バッファ
            summary: 集計

        Returns:
            ENDマーカー直後の位置
        """
        region_start = pos
        has_nested = False

        while True:
            start = text.find(self.start_marker, pos)
            end = text.find(self.end_marker, pos)

            if end == -1:
                raise MalformedMarkerError(
                    "START marker without matching END",
                    region_start - len(self.start_marker)
                )
            if start == -1 or start > end:
                break

            # 外側の領域の警告は内側のリーフ判定で消させない
            out.forget_warning()
            out.append(text[pos:start])
            pos = self._process_region(
                text, start + len(self.start_marker), out, summary
            )
            has_nested = True

        content = text[pos:end]
        out.append(content)
        summary.regions += 1

        # 残すと判定した警告は後続の領域の削除候補にしない
        if has_nested:
            # 入れ子を含む領域は定数と証明できない
            out.forget_warning()
            summary.warnings_kept += 1
        elif self.checker.needs_warning(content) or not content.strip():
            out.forget_warning()
            summary.warnings_kept += 1
        elif out.remove_last_warning():
            logger.debug(f"Removed warning before {content.strip()!r}")
            summary.warnings_removed += 1

        return end + len(self.end_marker)
