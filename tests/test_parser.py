"""
Unit tests for the text parser.
"""

import pytest

from txdag_core.config import LoadConfig
from txdag_core.errors import GraphError
from txdag_core.parser import ParseError, parse_fields, parse_file, parse_text, parse_triple


class TestParseTriple:
    def test_basic(self):
        assert parse_triple(["1", "2", "3"]) == (1, 2, 3)

    def test_wrong_field_count(self):
        with pytest.raises(ParseError):
            parse_triple(["1", "2"])

    def test_not_an_integer(self):
        with pytest.raises(ParseError) as excinfo:
            parse_triple(["1", "x", "3"], line=4)
        assert excinfo.value.line == 4
        assert "line 4" in str(excinfo.value)

    def test_negative(self):
        with pytest.raises(ParseError):
            parse_triple(["1", "1", "-1"])

    def test_parse_fields_builds_transaction(self):
        tx = parse_fields(["1", "1", "5"], 2)
        assert tx.id == 2
        assert tx.parents == (1, 1)
        assert tx.timestamp == 5
        assert tx.metrics.depth == 0


class TestParseText:
    def test_header_and_rows(self):
        text = "2\n1 1 5\n1 2 3\n"
        assert parse_text(text) == [(1, 1, 5), (1, 2, 3)]

    def test_comments_and_blank_lines_ignored(self):
        text = "# sample\n\n2\n1 1 5\n   \n# trailing\n1 2 3\n"
        assert parse_text(text) == [(1, 1, 5), (1, 2, 3)]

    def test_extra_whitespace(self):
        assert parse_text("1\n  1\t1   0  ") == [(1, 1, 0)]

    def test_count_mismatch_strict(self):
        with pytest.raises(ParseError):
            parse_text("3\n1 1 5\n")

    def test_count_mismatch_lenient(self):
        cfg = LoadConfig(strict_count=False)
        assert parse_text("3\n1 1 5\n", cfg) == [(1, 1, 5)]

    def test_missing_header(self):
        with pytest.raises(ParseError):
            parse_text("")

    def test_header_with_several_fields(self):
        with pytest.raises(ParseError) as excinfo:
            parse_text("1 1 5\n")
        assert excinfo.value.line == 1

    def test_no_header_mode(self):
        cfg = LoadConfig(expect_header=False)
        assert parse_text("1 1 5\n1 2 3", cfg) == [(1, 1, 5), (1, 2, 3)]

    def test_custom_comment_prefix(self):
        cfg = LoadConfig(comment_prefix="//")
        assert parse_text("// c\n1\n1 1 0", cfg) == [(1, 1, 0)]

    def test_error_reports_line_number(self):
        with pytest.raises(ParseError) as excinfo:
            parse_text("2\n1 1 5\n1 two 3\n")
        assert excinfo.value.line == 3

    def test_parse_error_is_not_graph_error(self):
        assert not issubclass(ParseError, GraphError)
        assert issubclass(ParseError, ValueError)

    def test_parse_file(self, tmp_path):
        path = tmp_path / "input.txt"
        path.write_text("2\n1 1 5\n1 2 3\n", encoding="utf-8")
        assert parse_file(str(path)) == [(1, 1, 5), (1, 2, 3)]


class TestStrictDigits:
    @pytest.mark.parametrize("token", ["+5", "1_000", "٣", " 5", "5.0", "-0"])
    def test_only_plain_ascii_digits(self, token):
        """Test signs, underscores and non-ASCII digits are rejected."""
        with pytest.raises(ParseError):
            parse_triple(["1", "1", token])

    def test_leading_zeros_accepted(self):
        assert parse_triple(["01", "1", "007"]) == (1, 1, 7)


class TestFileEncoding:
    def test_non_utf8_file(self, tmp_path):
        """Test undecodable bytes surface as a ParseError."""
        path = tmp_path / "latin.txt"
        path.write_bytes(b"1\n1 1 \xff\n")
        with pytest.raises(ParseError):
            parse_file(str(path))
