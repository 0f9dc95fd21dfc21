"""JavaScriptファイルから指定付き定数を抽出する。"""

from typing import Dict, List, Optional
from pathlib import Path
import logging
import re

from pydantic import ValidationError

from ..models.constant import ConstantDefinition

logger = logging.getLogger(__name__)

# 例: var MY_HELLO = "Hello" ; /* C: char * */
DESIGNATED_CONSTANT = re.compile(
    r"\s*(const|var|let)\s*(\w+)\s*=\s*(.+)\s*;\s*/\*\s*C\s*:\s*(.+)\s*\*/"
)


class ConstantExtractor:
    """`/* C: TYPE */` コメント付きの定数宣言を収集する。

    同じ定数名が複数回現れた場合は最初の定義を採用し、以降は警告して無視する。

    Attributes:
        constants: 抽出順の定数定義リスト
        source_files: 読み込みに成功した入力ファイルのリスト
    """

    def __init__(self):
        self.constants: List[ConstantDefinition] = []
        self.source_files: List[str] = []
        self._used_symbols: Dict[str, str] = {}

    def extract_files(self, paths: List[str]) -> List[ConstantDefinition]:
        """複数のJavaScriptファイルから定数を抽出する。

        Args:
            paths: 入力ファイルパスのリスト

        Returns:
            抽出した全定数定義のリスト
        """
        for path in paths:
            self.extract_file(path)

        logger.info(
            f"Extracted {len(self.constants)} constants "
            f"from {len(self.source_files)} files"
        )
        return self.constants

    def extract_file(self, path: str) -> List[ConstantDefinition]:
        """1つのJavaScriptファイルから定数を抽出する。

        Args:
            path: 入力ファイルのパス

        Returns:
            このファイルから新たに抽出した定数定義のリスト
        """
        file_path = Path(path)
        try:
            text = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Skipping unreadable JavaScript file {path}: {e}")
            return []

        self.source_files.append(path)
        found = []
        for line_no, line in enumerate(text.splitlines(), 1):
            constant = self.parse_line(line, file_path.name)
            if constant is None:
                continue

            if constant.symbol in self._used_symbols:
                logger.warning(
                    f"{path}:{line_no}: constant {constant.symbol} already "
                    f"defined in {self._used_symbols[constant.symbol]}, ignored"
                )
                continue

            self._used_symbols[constant.symbol] = file_path.name
            self.constants.append(constant)
            found.append(constant)

        logger.debug(f"{path}: {len(found)} designated constants")
        return found

    @staticmethod
    def parse_line(line: str, source: str) -> Optional[ConstantDefinition]:
        """1行を解析して定数定義を返す。

        Args:
            line: JavaScriptの1行
            source: 定義元として記録するファイル名

        Returns:
            ConstantDefinition、指定付き定数でなければNone
        """
        match = DESIGNATED_CONSTANT.search(line)
        if not match:
            return None

        try:
            return ConstantDefinition(
                symbol=match.group(2),
                value=match.group(3),
                c_type=match.group(4),
                source=source
            )
        except ValidationError as e:
            logger.warning(f"Invalid constant declaration in {source}: {e}")
            return None
