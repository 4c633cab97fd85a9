"""Tests for vendor_onboarding/common/csv_utils.py"""

from vendor_onboarding.common.csv_utils import parse_csv_text


class TestParseCsvText:
    def test_header_and_rows(self):
        headers, rows = parse_csv_text("Name,SKU\nShirt,S-1\nHat,H-1\n")
        assert headers == ["Name", "SKU"]
        assert rows == [["Shirt", "S-1"], ["Hat", "H-1"]]

    def test_quoted_field_with_comma(self):
        headers, rows = parse_csv_text('Name,Description\nShirt,"Soft, breathable"\n')
        assert rows[0][1] == "Soft, breathable"

    def test_escaped_quotes(self):
        _, rows = parse_csv_text('Name\n"The ""Best"" Shirt"\n')
        assert rows[0][0] == 'The "Best" Shirt'

    def test_strips_bom_and_whitespace(self):
        headers, rows = parse_csv_text("\ufeffName , SKU\n Shirt , S-1 \n")
        assert headers == ["Name", "SKU"]
        assert rows == [["Shirt", "S-1"]]

    def test_blank_input(self):
        assert parse_csv_text("") == ([], [])
        assert parse_csv_text("  \n ") == ([], [])
