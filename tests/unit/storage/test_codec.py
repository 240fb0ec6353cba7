"""Tests for the private store and export line encodings."""

import pytest

from canhao.episodes.models import Episode
from canhao.storage.codec import (
    decode_export_line,
    decode_store_line,
    encode_export_line,
    encode_store_line,
    escape_field,
    normalize_export_field,
    unescape_field,
)


def no_id() -> int:
    raise AssertionError("id factory should not be called")


class TestFieldEscaping:
    """Tests for escape_field / unescape_field."""

    @pytest.mark.parametrize(
        ("raw", "escaped"),
        [
            ("plain text", "plain text"),
            ("tab\there", "tab%09here"),
            ("two\nlines", "two%0Alines"),
            ("crlf\r\n", "crlf%0D%0A"),
            ("100%", "100%25"),
            ("%09 literal", "%2509 literal"),
        ],
    )
    def test_escape(self, raw: str, escaped: str) -> None:
        assert escape_field(raw) == escaped
        assert unescape_field(escaped) == raw

    def test_unknown_percent_sequences_are_literal(self) -> None:
        """Text from files written before escaping stays readable."""
        assert unescape_field("50%off %20 %zz") == "50%off %20 %zz"

    def test_unescape_accepts_lowercase_hex(self) -> None:
        assert unescape_field("a%0ab%0dc") == "a\nb\rc"


class TestStoreLines:
    """Tests for private store lines."""

    def test_encode(self) -> None:
        episode = Episode(id=123, title="Pilot", description="Intro")
        assert encode_store_line(episode) == "123\tPilot\tIntro\n"

    def test_encoded_line_has_three_fields(self) -> None:
        episode = Episode(id=1, title="a\tb", description="c\nd")
        line = encode_store_line(episode)
        assert line.count("\t") == 2
        assert line.count("\n") == 1

    def test_decode_restores_delimiters(self) -> None:
        episode = Episode(id=9, title="Tab\tin title", description="multi\nline %")
        assert decode_store_line(encode_store_line(episode), no_id) == episode

    def test_decode_too_few_fields(self) -> None:
        assert decode_store_line("1\tonly title", no_id) is None
        assert decode_store_line("garbage", no_id) is None

    def test_decode_ignores_extra_fields(self) -> None:
        episode = decode_store_line("5\tT\tD\textra", no_id)
        assert episode == Episode(id=5, title="T", description="D")

    def test_decode_bad_id_uses_factory(self) -> None:
        episode = decode_store_line("abc\tT\tD\n", lambda: 777)
        assert episode == Episode(id=777, title="T", description="D")

    @pytest.mark.parametrize("raw_id", [" 5 ", "1_000", "\u0665", "12a", "", "5.0"])
    def test_decode_non_ascii_integer_id_uses_factory(self, raw_id: str) -> None:
        """Only plain ASCII digits with an optional sign are accepted as ids."""
        episode = decode_store_line(f"{raw_id}\tT\tD", lambda: 777)
        assert episode is not None
        assert episode.id == 777

    @pytest.mark.parametrize(("raw_id", "expected"), [("42", 42), ("-7", -7), ("+8", 8)])
    def test_decode_signed_ids(self, raw_id: str, expected: int) -> None:
        assert decode_store_line(f"{raw_id}\tT\tD", no_id).id == expected

    def test_decode_empty_fields(self) -> None:
        assert decode_store_line("1\t\t", no_id) == Episode(id=1)


class TestExportLines:
    """Tests for export lines."""

    def test_normalize(self) -> None:
        assert normalize_export_field("a\nb\r\nc\rd") == "a b c d"
        assert normalize_export_field("x|||y") == "x|y"

    def test_encode(self) -> None:
        episode = Episode(id=1, title="Line\nbreak", description="pipes ||| here")
        assert encode_export_line(episode) == "Line break|||pipes | here\n"

    def test_encode_has_no_id(self) -> None:
        line = encode_export_line(Episode(id=424242, title="T", description="D"))
        assert "424242" not in line

    def test_decode_strips_fields(self) -> None:
        assert decode_export_line("  Hello ||| World \n") == ("Hello", "World")

    def test_decode_ignores_third_segment(self) -> None:
        assert decode_export_line("Hello|||World|||Extra") == ("Hello", "World")

    def test_decode_title_only(self) -> None:
        assert decode_export_line("Just a title") == ("Just a title", "")

    @pytest.mark.parametrize("line", ["", "\n", "   ", "|||", "  |||  \n"])
    def test_decode_blank_lines(self, line: str) -> None:
        assert decode_export_line(line) is None
