"""抽出した定数からCのヘッダーと実装ファイルを生成する。"""

from typing import List, Tuple
from pathlib import Path
import logging

from ..models.constant import ConstantDefinition

logger = logging.getLogger(__name__)

TOOL_NAME = "objc-port-tools"


class ConstantsGenerator:
    """定数定義から `.h` と `.c` のテキストを組み立てて書き出す。"""

    def __init__(self, output_path: str, source_files: List[str]):
        """ジェネレーターを初期化する。

        Args:
            output_path: 出力先のパス（拡張子 .h / .c を含まない）
            source_files: コメントに列挙する入力ファイル
        """
        self.output_path = Path(output_path)
        self.source_files = source_files

    @property
    def base_name(self) -> str:
        return self.output_path.name

    def _banner(self) -> str:
        file_list = "".join(f"    {path}\n" for path in self.source_files)
        return (
            "/*\n"
            f"This file is automatically generated by {TOOL_NAME}.\n"
            "The constants herein were copied from the following "
            "JavaScript files:\n\n"
            f"{file_list}\n"
            "Do not edit.\n"
            "*/\n\n"
        )

    def render_header(self, constants: List[ConstantDefinition]) -> str:
        """ヘッダーファイルのテキストを生成する。

        Args:
            constants: 書き出す定数定義

        Returns:
            インクルードガード付きのヘッダーテキスト
        """
        guard = f"_INCLUDED_{self.base_name.upper()}_H_"
        body = "".join(f"{c.declaration()}\n" for c in constants)
        return (
            self._banner()
            + f"#ifndef {guard}\n#define {guard}\n\n"
            + body
            + "\n#endif\n"
        )

    def render_source(self, constants: List[ConstantDefinition]) -> str:
        """実装ファイルのテキストを生成する。

        Args:
            constants: 書き出す定数定義

        Returns:
            対応するヘッダーをインクルードする実装テキスト
        """
        body = "".join(f"{c.definition()}\n" for c in constants)
        return self._banner() + f'#include "{self.base_name}.h"\n\n' + body

    def write(self, constants: List[ConstantDefinition]) -> Tuple[Path, Path]:
        """`.h` と `.c` を書き出す。

        Args:
            constants: 書き出す定数定義

        Returns:
            (ヘッダーのパス, 実装ファイルのパス)
        """
        header_path = self.output_path.with_name(self.base_name + ".h")
        source_path = self.output_path.with_name(self.base_name + ".c")
        header_path.parent.mkdir(parents=True, exist_ok=True)

        header_path.write_text(self.render_header(constants), encoding="utf-8")
        source_path.write_text(self.render_source(constants), encoding="utf-8")

        logger.info(
            f"Wrote {len(constants)} constants to {header_path} and {source_path}"
        )
        return header_path, source_path
