"""書式文字列引数の64ビット安全性判定。"""

import re
import logging

logger = logging.getLogger(__name__)

# 文字列リテラルとみなす先頭トークン
LITERAL_PREFIXES = ('"', '@"')

# 定数文字列マクロ
DEFAULT_CONSTANT_STRING_MACRO = "CFSTR"

# 64ビット化で問題にならない変換指定子の文字
SAFE_CONVERSIONS = "@sScCpl"

# フラグ文字
FORMAT_FLAGS = "#0\\-+ "


class FormatChecker:
    """リーフ領域の書式引数に警告が必要かどうかを判定する。

    引数がリテラルでなければ静的に安全を証明できないため常に警告を残す。
    リテラルの場合は、安全な変換文字以外の変換指定子を含むときだけ警告を残す。
    """

    def __init__(self, constant_string_macro: str = DEFAULT_CONSTANT_STRING_MACRO):
        """判定器を初期化する。

        Args:
            constant_string_macro: リテラルとみなす定数文字列マクロ名
        """
        self.constant_string_macro = constant_string_macro
        self._literal_prefixes = LITERAL_PREFIXES + (constant_string_macro,)
        # フラグの後の最初の文字を判定する（フラグ自体は変換文字として扱わない）
        self._unsafe_conversion = re.compile(
            f"%[{FORMAT_FLAGS}]*[^{re.escape(SAFE_CONVERSIONS)}{FORMAT_FLAGS}]"
        )

    def is_literal(self, content: str) -> bool:
        """内容が文字列リテラルで始まるかどうか。

        Args:
            content: 領域の内容

        Returns:
            先頭空白を除いてリテラルトークンで始まる場合True
        """
        return content.lstrip().startswith(self._literal_prefixes)

    def needs_warning(self, content: str) -> bool:
        """リーフ領域に対して警告を残すべきかを判定する。

        Args:
            content: マーカーを除いた領域の内容

        Returns:
            警告が必要な場合True
        """
        if not self.is_literal(content):
            return True

        match = self._unsafe_conversion.search(content)
        if match:
            logger.debug(f"Unsafe conversion {match.group(0)!r} in {content!r}")
            return True
        return False
