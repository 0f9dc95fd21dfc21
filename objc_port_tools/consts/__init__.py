"""JavaScript定数のC言語エクスポートモジュール。"""

from .extractor import ConstantExtractor
from .generator import ConstantsGenerator

__all__ = ["ConstantExtractor", "ConstantsGenerator"]
