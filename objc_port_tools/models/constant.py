"""JavaScriptから抽出した定数定義モデル。"""

from pydantic import BaseModel, Field, field_validator


class ConstantDefinition(BaseModel):
    """C言語側へ書き出す定数定義。"""

    symbol: str = Field(
        pattern=r"^\w+$",
        description="定数名（JavaScript側の識別子をそのまま使用）"
    )
    value: str = Field(
        min_length=1,
        description="初期化式（JavaScriptのソース表記のまま）"
    )
    c_type: str = Field(
        min_length=1,
        description="宣言するCの型（例: int, char *, float）"
    )
    source: str = Field(
        description="定義元のJavaScriptファイル名"
    )

    @field_validator("symbol", "value", "c_type", mode="before")
    @classmethod
    def strip_whitespace(cls, value: str) -> str:
        return value.strip() if isinstance(value, str) else value

    def declaration(self) -> str:
        """ヘッダーファイル用のextern宣言を返す。"""
        return f"extern {self.c_type} const {self.symbol} ;"

    def definition(self) -> str:
        """実装ファイル用の定義行を返す。"""
        return (
            f"{self.c_type} const {self.symbol} = {self.value} ; "
            f"/* from {self.source} */"
        )
