"""Tests for the Polybius square family."""

import pytest

from cipher_pipeline.transforms.polybius import find_in_square, polybius_square


class TestSquare:

    def test_plain_square_merges_j(self):
        square = polybius_square("")
        assert len(square) == 25
        assert "J" not in square
        assert square[:6] == "ABCDEF"

    def test_key_goes_first_without_duplicates(self):
        square = polybius_square("Keyword key")
        assert square.startswith("KEYWORDABC")
        assert len(set(square)) == 25

    def test_six_by_six_includes_digits(self):
        square = polybius_square("z9", 6)
        assert len(square) == 36
        assert square.startswith("Z9AB")

    def test_five_by_five_ignores_key_digits(self):
        assert polybius_square("1A", 5) == polybius_square("A", 5)

    def test_find_maps_j_to_i(self):
        square = polybius_square("")
        assert find_in_square(square, "J") == find_in_square(square, "I")
        assert find_in_square(square, "?") == -1


class TestPolybius:

    def test_encode(self, make_stage):
        assert make_stage("polybius").apply("HELLO") == "23 15 31 31 34 "

    def test_encode_keeps_unmapped_characters(self, make_stage):
        assert make_stage("polybius").apply("a b") == "11  12 "

    def test_decode(self, make_stage):
        assert make_stage("polybius", mode="decode").apply("23 15 31 31 34") == "HELLO"

    def test_decode_skips_out_of_range_pairs(self, make_stage):
        assert make_stage("polybius", mode="decode").apply("11 66 12 7") == "AB"

    def test_six_by_six(self, make_stage):
        stage = make_stage("polybius", size=6)
        assert stage.apply("A1") == "11 54 "
        stage.mode = "decode"
        assert stage.apply("11 54") == "A1"

    def test_keyed(self, make_stage):
        assert make_stage("polybius", key="KEY").apply("K") == "11 "


class TestTapCode:

    def test_encode(self, make_stage):
        assert make_stage("tap_code").apply("HI") == ".. ...  .. ....  "

    def test_decode(self, make_stage):
        assert make_stage("tap_code", mode="decode").apply(".. ...  .. ....  ") == "HI"


class TestADFGX:

    def test_without_transposition_key(self, make_stage):
        assert make_stage("adfgx").apply("Az") == "AAXX"

    @pytest.mark.parametrize("message", ["ATTACKATONCE", "DEFENDTHEEASTWALL", "X"])
    def test_round_trip(self, make_stage, message):
        settings = dict(polybius_key="BTALPDHOZKQFVSNGICUXMREWY", transposition_key="CARGO")
        ciphertext = make_stage("adfgx", **settings).apply(message)

        assert set(ciphertext) <= set("ADFGX ")
        assert make_stage("adfgx", mode="decode", **settings).apply(ciphertext) == message

    def test_columns_written_in_key_order(self, make_stage):
        stage = make_stage("adfgx", transposition_key="BA")
        # "AB" -> "AAAD"; column 0 = "AA", column 1 = "AD"; key "BA" reads column 1 first.
        assert stage.apply("AB") == "AD AA "

    def test_decode_without_key_is_empty(self, make_stage):
        assert make_stage("adfgx", mode="decode").apply("AAXX") == ""


class TestBifid:

    def test_known_value(self, make_stage):
        stage = make_stage("bifid", key="BGWKZQPNDSIOAXEFCLUMTHYVR")
        assert stage.apply("FLEEATONCE") == "UAEOLWRINS"

    def test_decode(self, make_stage):
        stage = make_stage("bifid", key="BGWKZQPNDSIOAXEFCLUMTHYVR", mode="decode")
        assert stage.apply("UAEOLWRINS") == "FLEEATONCE"

    def test_empty(self, make_stage):
        assert make_stage("bifid").apply("") == ""


class TestNihilist:

    def test_empty_keyword_is_an_error(self, make_stage):
        assert make_stage("nihilist").apply("attack") == "Error: Keyword cannot be empty"

    def test_encode(self, make_stage):
        assert make_stage("nihilist", keyword="KEY").apply("ab") == "36 27"

    def test_decode(self, make_stage):
        stage = make_stage("nihilist", keyword="KEY", mode="decode")
        assert stage.apply("36 27 junk") == "AB"

    def test_round_trip(self, make_stage):
        settings = dict(keyword="RUSSIAN", polybius_key="ZEBRAS")
        ciphertext = make_stage("nihilist", **settings).apply("DYNAMITE WINTER PALACE")

        assert make_stage("nihilist", mode="decode", **settings).apply(ciphertext) == (
            "DYNAMITEWINTERPALACE"
        )


class TestTrifid:

    @pytest.mark.parametrize("key", ["", "FELIX"])
    def test_round_trip(self, make_stage, key):
        ciphertext = make_stage("trifid", key=key).apply("DEFEND THE EAST WALL.")

        assert make_stage("trifid", key=key, mode="decode").apply(ciphertext) == (
            "DEFENDTHEEASTWALL."
        )

    def test_empty(self, make_stage):
        assert make_stage("trifid").apply("") == ""
