import unittest

from htmlcharref.buffer import ConsumeBuffer
from htmlcharref.charref import consume_character_reference, consume_named_reference
from htmlcharref.entities import NamedEntityTable
from htmlcharref.errors import ParseErrorCollector
from htmlcharref.stream import CharacterStream


def _decode(text, additional_allowed_char=None, prefix="", **kwargs):
    """Run one decode over ``text`` (the input following an ampersand)."""
    stream = CharacterStream(text)
    buffer = ConsumeBuffer(prefix)
    errors = ParseErrorCollector()
    taken = consume_character_reference(stream, buffer, errors, additional_allowed_char, **kwargs)
    return taken, buffer.getvalue(), errors.codes, stream


class TestEntryDispatch(unittest.TestCase):
    def test_eof_clears_buffer(self) -> None:
        taken, value, codes, _ = _decode("", prefix="pending")
        assert taken is False
        self.assertEqual(value, "")
        self.assertEqual(codes, [])

    def test_terminator_suppresses_reference(self) -> None:
        taken, value, codes, stream = _decode('"rest', additional_allowed_char='"', prefix="x")
        assert taken is False
        self.assertEqual(value, "")
        self.assertEqual(codes, [])
        # One character read, then pushed back.
        self.assertEqual(stream.tell(), 0)
        self.assertEqual(stream.read(), '"')

    def test_terminator_only_applies_to_first_character(self) -> None:
        taken, value, _, _ = _decode("amp;", additional_allowed_char='"')
        assert taken is True
        self.assertEqual(value, "&")

    def test_whitespace_is_left_for_the_caller(self) -> None:
        for char in "\t\n\f":
            taken, value, codes, stream = _decode(char + "x", prefix="keep")
            assert taken is False
            self.assertEqual(value, "keep")
            self.assertEqual(codes, [])
            self.assertEqual(stream.read(), char)


class TestNumericReferences(unittest.TestCase):
    def test_decimal_and_hex(self) -> None:
        for text in ("#65;", "#x41;", "#X41;", "#x0041;"):
            taken, value, codes, _ = _decode(text)
            assert taken is True, text
            self.assertEqual(value, "A", text)
            self.assertEqual(codes, [], text)

    def test_valid_scalars_decode_to_themselves(self) -> None:
        for codepoint in (0x09, 0x0A, 0x0D, 0x20, 0x7E, 0xA0, 0xE9, 0x2603, 0xFFFD, 0x1F600, 0x10FFFD):
            _, value, codes, _ = _decode(f"#{codepoint};")
            self.assertEqual(value, chr(codepoint), hex(codepoint))
            self.assertEqual(codes, [], hex(codepoint))

    def test_appends_after_existing_content(self) -> None:
        _, value, _, _ = _decode("#x263A;", prefix="ab")
        self.assertEqual(value, "ab\u263a")

    def test_semicolon_is_consumed(self) -> None:
        _, _, _, stream = _decode("#65;tail")
        self.assertEqual(stream.read(), "t")

    def test_legacy_windows_1252_replacement(self) -> None:
        taken, value, codes, _ = _decode("#128;")
        assert taken is True
        self.assertEqual(value, "\u20ac")
        self.assertEqual(codes, [])
        self.assertEqual(_decode("#x99;")[1], "\u2122")
        self.assertEqual(_decode("#x81;")[1], "\x81")

    def test_null_reference_is_dropped(self) -> None:
        taken, value, codes, _ = _decode("#0;", prefix="ab")
        assert taken is True
        self.assertEqual(value, "ab")
        self.assertEqual(codes, ["null-character-reference"])

    def test_no_digits(self) -> None:
        for text in ("#;", "#x;"):
            taken, value, codes, _ = _decode(text, prefix="ab")
            assert taken is False
            self.assertEqual(value, "ab")
            self.assertEqual(codes, ["absence-of-digits-in-numeric-character-reference"])

    def test_missing_semicolon_rolls_back(self) -> None:
        taken, value, codes, stream = _decode("#65 x", prefix="ab")
        assert taken is False
        self.assertEqual(value, "ab")
        self.assertEqual(codes, ["missing-semicolon-after-character-reference"])
        self.assertEqual(stream.read(), " ")

    def test_non_hex_digit_ends_hex_reference(self) -> None:
        taken, value, codes, _ = _decode("#x4g;")
        assert taken is False
        self.assertEqual(value, "")
        self.assertEqual(codes, ["missing-semicolon-after-character-reference"])

    def test_eof_inside_digits_rolls_back_silently(self) -> None:
        for text in ("#", "#x", "#65", "#x41"):
            taken, value, codes, _ = _decode(text, prefix="ab")
            assert taken is False, text
            self.assertEqual(value, "ab", text)
            self.assertEqual(codes, [], text)

    def test_control_character_is_dropped(self) -> None:
        taken, value, codes, _ = _decode("#1;")
        assert taken is True
        self.assertEqual(value, "")
        self.assertEqual(codes, ["control-character-reference"])
        self.assertEqual(_decode("#x0B;")[2], ["control-character-reference"])
        self.assertEqual(_decode("#x7F;")[2], ["control-character-reference"])

    def test_noncharacter_is_dropped(self) -> None:
        for text in ("#xFDD0;", "#xFFFE;", "#x10FFFF;"):
            taken, value, codes, _ = _decode(text)
            assert taken is True, text
            self.assertEqual(value, "", text)
            self.assertEqual(codes, ["noncharacter-character-reference"], text)

    def test_surrogate_is_replaced(self) -> None:
        taken, value, codes, _ = _decode("#xD801;")
        assert taken is True
        self.assertEqual(value, "\ufffd")
        self.assertEqual(codes, ["surrogate-character-reference"])

    def test_surrogate_range_bounds_are_exclusive(self) -> None:
        for text, expected in (("#xD800;", "\ud800"), ("#xDFFF;", "\udfff"), ("#57343;", "\udfff")):
            taken, value, codes, _ = _decode(text)
            assert taken is True, text
            self.assertEqual(value, expected, text)
            self.assertEqual(codes, [], text)

    def test_beyond_unicode_is_replaced(self) -> None:
        taken, value, codes, _ = _decode("#x110000;")
        assert taken is True
        self.assertEqual(value, "\ufffd")
        self.assertEqual(codes, ["character-reference-outside-unicode-range"])

    def test_overflow_falls_back_to_zero(self) -> None:
        for text in ("#x100000000;", "#99999999999;", "#" + "9" * 5000 + ";"):
            taken, value, codes, _ = _decode(text)
            assert taken is True
            self.assertEqual(value, "")
            self.assertEqual(codes, ["null-character-reference"])

    def test_leading_zeros_do_not_overflow(self) -> None:
        for text in ("#" + "0" * 5000 + "65;", "#x" + "0" * 5000 + "41;", "#0000000000065;"):
            taken, value, codes, _ = _decode(text)
            assert taken is True
            self.assertEqual(value, "A")
            self.assertEqual(codes, [])
        _, value, codes, _ = _decode("#" + "0" * 5000 + ";")
        self.assertEqual(value, "")
        self.assertEqual(codes, ["null-character-reference"])

    def test_largest_32_bit_value_is_out_of_range(self) -> None:
        _, value, codes, _ = _decode("#xFFFFFFFF;")
        self.assertEqual(value, "\ufffd")
        self.assertEqual(codes, ["character-reference-outside-unicode-range"])

    def test_idempotent_across_independent_streams(self) -> None:
        for text in ("#65;", "#x80;", "#1;", "#xD900;", "#;", "copy;", "notit;"):
            first = _decode(text)
            second = _decode(text)
            self.assertEqual(first[:3], second[:3], text)


class TestNamedReferences(unittest.TestCase):
    def test_semicolon_terminated(self) -> None:
        taken, value, codes, stream = _decode("amp;rest")
        assert taken is True
        self.assertEqual(value, "&")
        self.assertEqual(codes, [])
        self.assertEqual(stream.read(), "r")

    def test_longest_match_wins(self) -> None:
        self.assertEqual(_decode("notin;")[1], "\u2209")
        self.assertEqual(_decode("NotEqualTilde;")[1], "\u2242\u0338")

    def test_legacy_name_without_semicolon(self) -> None:
        taken, value, codes, _ = _decode("copy 2024")
        assert taken is True
        self.assertEqual(value, "\u00a9")
        self.assertEqual(codes, ["missing-semicolon-after-character-reference"])

    def test_legacy_name_at_eof(self) -> None:
        taken, value, codes, _ = _decode("amp")
        assert taken is True
        self.assertEqual(value, "&")
        self.assertEqual(codes, ["missing-semicolon-after-character-reference"])

    def test_characters_past_the_match_stay_literal(self) -> None:
        taken, value, codes, stream = _decode("notit;")
        assert taken is True
        self.assertEqual(value, "\u00aci")
        self.assertEqual(codes, ["missing-semicolon-after-character-reference"])
        self.assertEqual(stream.read(), "t")

    def test_modern_name_requires_semicolon(self) -> None:
        taken, value, codes, _ = _decode("hellip ")
        assert taken is False
        self.assertEqual(codes, ["unknown-named-character-reference"])
        assert value.startswith("hellip")

    def test_unknown_name_leaves_literal_text(self) -> None:
        taken, value, codes, stream = _decode("foo;", prefix=">")
        assert taken is False
        self.assertEqual(value, ">fo")
        self.assertEqual(codes, ["unknown-named-character-reference"])
        self.assertEqual(stream.read(), "o")

    def test_non_alphanumeric_is_not_a_reference(self) -> None:
        for text in (" x", "<p>", "&amp;", "\u00e9;"):
            taken, value, codes, stream = _decode(text)
            assert taken is False, text
            self.assertEqual(value, "", text)
            self.assertEqual(codes, [], text)
            self.assertEqual(stream.tell(), 0, text)

    def test_attribute_suppresses_legacy_before_alnum_or_equals(self) -> None:
        for text in ("ampb", "amp=", "notit"):
            taken, value, codes, _ = _decode(text, in_attribute=True)
            assert taken is False, text
            self.assertEqual(codes, [], text)

    def test_attribute_decodes_legacy_before_other_characters(self) -> None:
        taken, value, codes, _ = _decode("amp&x", '"')
        assert taken is True
        self.assertEqual(value, "&")
        self.assertEqual(codes, ["missing-semicolon-after-character-reference"])

    def test_attribute_decodes_semicolon_names(self) -> None:
        taken, value, _, _ = _decode("amp;b", '"')
        assert taken is True
        self.assertEqual(value, "&")

    def test_custom_table(self) -> None:
        table = NamedEntityTable({"snow;": 0x2603, "sn": 0x2744})
        self.assertEqual(_decode("snow;", table=table)[1], "\u2603")
        self.assertEqual(_decode("snx", table=table)[1], "\u2744")
        self.assertEqual(_decode("amp;", table=table)[0], False)

    def test_named_decoder_directly(self) -> None:
        stream = CharacterStream("t;")
        buffer = ConsumeBuffer()
        errors = ParseErrorCollector()
        assert consume_named_reference("g", stream, buffer, errors) is True
        self.assertEqual(buffer.getvalue(), ">")
