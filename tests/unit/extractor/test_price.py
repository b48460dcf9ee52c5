"""
Unit tests for price and currency normalization.
"""

import pytest

from pricequarry.extractor.price import normalize_currency, parse_price


class TestNormalizeCurrency:
    """Currency detection from symbols and codes."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("€12", "EUR"),
            ("£9.99", "GBP"),
            ("$5", "USD"),
            ("AED 1,200", "AED"),
            ("sar 45", "SAR"),
            ("Price: 3.500 KWD", "KWD"),
            ("120 QAR", "QAR"),
            ("BHD 10", "BHD"),
            ("OMR 4.2", "OMR"),
            ("1.299 TRY", "TRY"),
        ],
    )
    def test_detects_currency(self, text, expected):
        assert normalize_currency(text) == expected

    def test_symbol_takes_precedence_over_code(self):
        assert normalize_currency("AED $12") == "USD"

    def test_gulf_codes_take_precedence_over_bare_codes(self):
        assert normalize_currency("TRY or AED 10") == "AED"

    def test_gulf_code_must_be_whole_word(self):
        assert normalize_currency("RAEDX 10") is None

    def test_lowercase_bare_token_is_not_a_code(self):
        assert normalize_currency("abc 10") is None

    @pytest.mark.parametrize("text", ["", "   ", None, "1234"])
    def test_no_currency(self, text):
        assert normalize_currency(text) is None


class TestParsePrice:
    """Numeric parsing with mixed separator conventions."""

    def test_us_format(self):
        result = parse_price("$1,234.56")
        assert result.price == 1234.56
        assert result.currency == "USD"
        assert result.raw == "$1,234.56"

    def test_european_format(self):
        result = parse_price("1.234,56 €")
        assert result.price == 1234.56
        assert result.currency == "EUR"

    def test_decimal_comma(self):
        result = parse_price("12,99")
        assert result.price == 12.99
        assert result.currency is None

    def test_thousands_comma(self):
        result = parse_price("AED 1,200")
        assert result.price == 1200
        assert result.currency == "AED"

    def test_multiple_thousands_commas(self):
        assert parse_price("1,234,567").price == 1234567

    def test_decimal_comma_with_thousands_groups(self):
        assert parse_price("1,234,56").price == 1234.56

    def test_plain_integer(self):
        assert parse_price("49").price == 49.0

    def test_whitespace_is_collapsed_in_raw(self):
        result = parse_price("  £ 19.99\n  incl. VAT ")
        assert result.raw == "£ 19.99 incl. VAT"
        assert result.price == 19.99
        assert result.currency == "GBP"

    def test_non_numeric_keeps_raw(self):
        result = parse_price("Sold out")
        assert result.price is None
        assert result.raw == "Sold out"
        assert result.currency is None

    def test_lone_separator_is_not_a_number(self):
        result = parse_price("$.")
        assert result.price is None
        assert result.currency == "USD"

    @pytest.mark.parametrize("text", ["", None, "   "])
    def test_empty_input(self, text):
        result = parse_price(text)
        assert result.price is None
        assert result.raw is None
        assert result.currency is None

    def test_minus_sign_is_dropped(self):
        assert parse_price("-5.00").price == 5.0

    def test_overflow_is_not_a_price(self):
        assert parse_price("9" * 400).price is None
