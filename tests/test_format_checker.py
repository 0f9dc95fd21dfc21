"""書式引数判定のテスト。"""

import pytest

from objc_port_tools.postprocess.format_checker import FormatChecker


class TestLiteralDetection:
    """リテラル判定のテスト。"""

    def setup_method(self):
        self.checker = FormatChecker()

    @pytest.mark.parametrize("content", [
        '@"Hello"',
        '"Hello"',
        'CFSTR("Hello")',
        '   @"indented"',
        '\n\t"after newline"',
    ])
    def test_literal_prefixes(self, content):
        """文字列リテラルとして扱う先頭トークンのテスト。"""
        assert self.checker.is_literal(content)

    @pytest.mark.parametrize("content", [
        "someVariable",
        "[self formatString]",
        "NSLocalizedString(@\"key\", nil)",
        "",
    ])
    def test_non_literal(self, content):
        """リテラル以外の式のテスト。"""
        assert not self.checker.is_literal(content)


class TestNeedsWarning:
    """警告要否判定のテスト。"""

    def setup_method(self):
        self.checker = FormatChecker()

    @pytest.mark.parametrize("content", [
        '@"Hello %@"',
        '"%s and %S"',
        '@"%c%C"',
        '@"pointer %p"',
        '@"long %ld"',
        '@"long %lu"',
        '@"no conversions at all"',
        'CFSTR("%@")',
        '@"flags %-s %#@ %+p % c %0S"',
    ])
    def test_safe_literals(self, content):
        """安全な変換指定子のみを含むリテラルは警告不要。"""
        assert self.checker.needs_warning(content) is False

    @pytest.mark.parametrize("content", [
        '@"Value: %d"',
        '@"%@ then %i"',
        '"%f"',
        '@"%x"',
        '@"%#x"',
        '@"%5s"',
        '@"100%%"',
        'CFSTR("%u")',
    ])
    def test_unsafe_literals(self, content):
        """安全でない変換指定子を含むリテラルは警告が必要。"""
        assert self.checker.needs_warning(content) is True

    def test_non_literal_always_needs_warning(self):
        """リテラルでない引数は内容に関係なく警告が必要。"""
        assert self.checker.needs_warning("someVariable") is True
        assert self.checker.needs_warning("fmt /* %@ */") is True

    @pytest.mark.parametrize("content, expected", [
        ('@"%-s"', False),
        ('@"%#@"', False),
        ('@"%+p"', False),
        ('@"% c"', False),
        ('@"%0S"', False),
        ('@"%-0+ #l"', False),
        ('@"%5s"', True),
        ('@"%-5s"', True),
        ('@"%-d"', True),
    ])
    def test_flags_and_width(self, content, expected):
        """フラグは読み飛ばし、桁数指定は安全でない文字として扱う。"""
        assert self.checker.needs_warning(content) is expected

    def test_custom_constant_string_macro(self):
        """定数文字列マクロ名を変更した場合のテスト。"""
        checker = FormatChecker("MY_STR")
        assert checker.needs_warning('MY_STR("%@")') is False
        assert checker.needs_warning('CFSTR("%@")') is True
