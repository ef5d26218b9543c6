"""Tests for plain text transforms and alphabets."""

import pytest


class TestReplace:

    def test_replaces_every_occurrence(self, make_stage):
        stage = make_stage("replace", find="o", replace="0")
        assert stage.apply("foo boo") == "f00 b00"

    def test_empty_find_is_identity(self, make_stage):
        assert make_stage("replace").apply("unchanged") == "unchanged"


class TestReverseAndCase:

    def test_reverse(self, make_stage):
        assert make_stage("reverse").apply("stressed") == "desserts"

    @pytest.mark.parametrize("mode,expected", [
        ("lower", "hello world"),
        ("upper", "HELLO WORLD"),
        ("capitalize", "HELLo WoRLD"),
        ("alternating", "hElLo wOrLd"),
    ])
    def test_case_modes(self, make_stage, mode, expected):
        assert make_stage("case_transform", mode=mode).apply("hELLo woRLD") == expected

    def test_case_mode_accepts_label(self, make_stage):
        assert make_stage("case_transform", mode="Upper Case").mode == "upper"


class TestNumeral:

    def test_default_decimal_to_binary(self, make_stage):
        assert make_stage("numeral").apply("10 255") == "1010 11111111"

    def test_hex_to_decimal(self, make_stage):
        stage = make_stage("numeral", **{"from": "hexadecimal", "to": "decimal"})
        assert stage.apply("ff 10") == "255 16"

    def test_unparsable_tokens_survive(self, make_stage):
        stage = make_stage("numeral", **{"from": "binary", "to": "octal"})
        assert stage.apply("1000 two 111") == "10 two 7"

    def test_whitespace_is_normalised(self, make_stage):
        assert make_stage("numeral").apply("  1 \n 2  ") == "1 10"

    def test_signed_tokens(self, make_stage):
        assert make_stage("numeral").apply("-5 +5") == "-101 101"

    @pytest.mark.parametrize("token", ["1_000", "١٢", "0x1f", "-", "1.5"])
    def test_non_ascii_digit_forms_are_kept(self, make_stage, token):
        assert make_stage("numeral").apply(token) == token

    @pytest.mark.parametrize("source,token", [
        ("decimal", "9" * 5000),
        ("octal", "7" * 5000),
        ("binary", "1" * 65),
        ("decimal", "9223372036854775808"),
    ])
    def test_values_beyond_64_bits_are_kept(self, make_stage, source, token):
        stage = make_stage("numeral", **{"from": source, "to": "hexadecimal"})
        assert stage.apply(token) == token

    def test_64_bit_bounds_convert(self, make_stage):
        stage = make_stage("numeral", **{"from": "decimal", "to": "hexadecimal"})
        assert stage.apply("9223372036854775807 -9223372036854775808") == (
            "7fffffffffffffff -8000000000000000"
        )

    def test_long_run_in_pipeline_is_not_an_error(self, pipeline):
        stage = pipeline.add("numeral")
        stage.source = "octal"
        stage.target = "decimal"
        pipeline.source_text = "7" * 5000 + " 10"

        assert pipeline.evaluate().final == "7" * 5000 + " 8"


class TestBitwise:

    def test_xor_with_space_flips_case(self, make_stage):
        stage = make_stage("bitwise", op="xor", operand="32")
        assert stage.apply("abc") == "ABC"

    def test_not_of_ascii_is_lossy(self, make_stage):
        assert make_stage("bitwise").apply("a") == "\ufffd"

    @pytest.mark.parametrize("operand", ["300", "-1", "lots", " 7 ", "٧", "", "9" * 5000])
    def test_out_of_range_operand_counts_as_zero(self, make_stage, operand):
        stage = make_stage("bitwise", op="or", operand=operand)
        assert stage.apply("abc") == "abc"

    @pytest.mark.parametrize("operand", ["+32", "032", "00000032"])
    def test_operand_sign_and_leading_zeros(self, make_stage, operand):
        stage = make_stage("bitwise", op="xor", operand=operand)
        assert stage.apply("abc") == "ABC"

    def test_and_clears_bits(self, make_stage):
        stage = make_stage("bitwise", op="and", operand="0")
        assert stage.apply("ab") == "\x00\x00"

    def test_xnor_with_full_mask_is_identity(self, make_stage):
        stage = make_stage("bitwise", op="xnor", operand="255")
        assert stage.apply("Plain") == "Plain"


class TestMorse:

    def test_encode(self, make_stage):
        assert make_stage("morse").apply("sos") == "... --- ..."

    def test_unknown_characters_become_blank_slots(self, make_stage):
        assert make_stage("morse").apply("hi 5") == ".... ..   ....."

    def test_decode(self, make_stage):
        stage = make_stage("morse", mode="decode")
        assert stage.apply(".... ..   .....") == "HI5"

    def test_decode_unknown_code_is_space(self, make_stage):
        stage = make_stage("morse", mode="decode")
        assert stage.apply("... ........ ...") == "S S"


class TestSpelling:

    def test_nato_words(self, make_stage):
        assert make_stage("spelling").apply("Hi") == "Hotel India"

    def test_empty(self, make_stage):
        assert make_stage("spelling").apply("") == ""
