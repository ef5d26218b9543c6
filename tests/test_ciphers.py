"""Tests for classical ciphers and the Enigma machine."""

import pytest

from cipher_pipeline import create_transform


class TestCaesar:

    def test_default_shift_is_one(self, make_stage):
        assert make_stage("caesar").apply("abc XYZ!") == "bcd YZA!"

    def test_decode_undoes_encode(self, make_stage):
        assert make_stage("caesar", shift=3, mode="decode").apply("def") == "abc"

    @pytest.mark.parametrize("shift,expected", [(-1, "z"), (27, "b"), (26, "a")])
    def test_shift_wraps(self, make_stage, shift, expected):
        assert make_stage("caesar", shift=shift).apply("a") == expected

    def test_non_ascii_letters_pass_through(self, make_stage):
        assert make_stage("caesar").apply("ßé") == "ßé"


class TestAffine:

    def test_known_value(self, make_stage):
        assert make_stage("affine").apply("AFFINE CIPHER") == "IHHWVC SWFRCP"

    def test_decode(self, make_stage):
        assert make_stage("affine", mode="decode").apply("IHHWVC SWFRCP") == "AFFINE CIPHER"

    @pytest.mark.parametrize("a,reported", [(4, 4), (13, 13), (30, 4), (0, 0)])
    def test_non_coprime_slope_is_reported(self, make_stage, a, reported):
        stage = make_stage("affine", a=a)
        assert stage.apply("text") == f"Error: 'a' ({reported}) must be coprime to 26."

    def test_negative_intercept(self, make_stage):
        stage = make_stage("affine", a=1, b=-1)
        assert stage.apply("b") == "a"


class TestRot13:

    def test_involution(self, make_stage):
        stage = make_stage("rot13")
        assert stage.apply(stage.apply("Hello, World")) == "Hello, World"


class TestA1Z26:

    def test_encode_keeps_word_gaps(self, make_stage):
        assert make_stage("a1z26").apply("ab c") == "1-2- -3"

    def test_encode_drops_symbols(self, make_stage):
        assert make_stage("a1z26").apply("z!") == "26"

    def test_decode(self, make_stage):
        assert make_stage("a1z26", mode="decode").apply("8-5-12-12-15") == "hello"

    def test_decode_out_of_range(self, make_stage):
        assert make_stage("a1z26", mode="decode").apply("1 0 27 2") == "a??b"

    def test_decode_leading_zeros(self, make_stage):
        assert make_stage("a1z26", mode="decode").apply("01-002-0026") == "abz"

    def test_decode_very_long_number(self, make_stage):
        stage = make_stage("a1z26", mode="decode")
        assert stage.apply("1" * 5000 + "-2") == "?b"

    def test_long_number_in_pipeline_is_not_an_error(self, pipeline):
        pipeline.add("a1z26").mode = "decode"
        pipeline.source_text = "1" * 5000

        assert pipeline.evaluate().final == "?"


class TestVigenere:

    def test_known_value(self, make_stage):
        stage = make_stage("vigenere", key="LEMON")
        assert stage.apply("ATTACKATDAWN") == "LXFOPVEFRNHR"

    def test_key_case_and_symbols_ignored(self, make_stage):
        stage = make_stage("vigenere", key="le-mon1")
        assert stage.apply("attack at dawn") == "lxfopv ef rnhr"

    def test_decode(self, make_stage):
        stage = make_stage("vigenere", key="LEMON", mode="decode")
        assert stage.apply("LXFOPVEFRNHR") == "ATTACKATDAWN"

    def test_key_without_letters_is_identity(self, make_stage):
        assert make_stage("vigenere", key="123").apply("plain") == "plain"


class TestBacon:

    def test_encode(self, make_stage):
        assert make_stage("bacon").apply("ab") == "aaaaa aaaab "

    def test_encode_keeps_other_characters(self, make_stage):
        assert make_stage("bacon").apply("z!") == "bbaab !"

    def test_decode(self, make_stage):
        assert make_stage("bacon", mode="decode").apply("AAAAA aaaab") == "ab"

    def test_decode_overflow_and_incomplete_chunk(self, make_stage):
        assert make_stage("bacon", mode="decode").apply("bbbbb aab") == "? "


class TestSubstitution:

    def test_default_is_atbash(self, make_stage):
        assert make_stage("substitution").apply("Hello") == "Svool"

    def test_decode(self, make_stage):
        assert make_stage("substitution", mode="decode").apply("Svool") == "Hello"

    def test_length_mismatch(self, make_stage):
        stage = make_stage("substitution", ciphertext="abc")
        assert stage.apply("x") == (
            "Error: Plaintext and Ciphertext alphabets must have the same length."
        )


class TestRailFence:

    def test_known_value(self, make_stage):
        stage = make_stage("rail_fence")
        assert stage.apply("WEAREDISCOVEREDFLEEATONCE") == "WECRLTEERDSOEEFEAOCAIVDEN"

    def test_decode(self, make_stage):
        stage = make_stage("rail_fence", mode="decode")
        assert stage.apply("WECRLTEERDSOEEFEAOCAIVDEN") == "WEAREDISCOVEREDFLEEATONCE"

    def test_rails_clamped_to_two(self, make_stage):
        stage = make_stage("rail_fence", rails=1)
        assert stage.rails == 2
        assert stage.apply("HELLO") == "HLOEL"

    def test_direct_low_rails_still_works(self):
        stage = create_transform("rail_fence")
        stage.rails = 0
        assert stage.apply("HELLO") == "HLOEL"

    def test_more_rails_than_letters(self, make_stage):
        stage = make_stage("rail_fence", rails=10)
        assert stage.apply("abc") == "abc"

    def test_empty(self, make_stage):
        assert make_stage("rail_fence").apply("") == ""


class TestEnigma:

    def test_default_machine(self, make_stage):
        assert make_stage("enigma").apply("AAAAA") == "BDZGO"

    def test_lowercase_input_is_uppercased(self, make_stage):
        assert make_stage("enigma").apply("aaaaa") == "BDZGO"

    def test_ring_settings(self, make_stage):
        stage = make_stage("enigma", left_ring=1, middle_ring=1, right_ring=1)
        assert stage.apply("AAAAA") == "EWTYX"

    def test_non_letters_do_not_step_rotors(self, make_stage):
        assert make_stage("enigma").apply("A-A") == "B-D"

    def test_reciprocal_with_full_configuration(self, make_stage):
        settings = dict(
            left_rotor=4, middle_rotor=6, right_rotor=7,
            left_position=12, middle_position=3, right_position=20,
            left_ring=5, middle_ring=0, right_ring=17,
            reflector=1, plugboard="AB CD EF",
        )
        message = "DOUBLESTEPPINGACROSSTHENOTCH"
        ciphertext = make_stage("enigma", **settings).apply(message)

        assert ciphertext != message
        assert make_stage("enigma", **settings).apply(ciphertext) == message

    def test_plugboard_changes_output(self, make_stage):
        plain = make_stage("enigma").apply("HELLO")
        plugged = make_stage("enigma", plugboard="HX LQ").apply("HELLO")
        assert plain != plugged

    def test_malformed_plugboard_pairs_ignored(self, make_stage):
        stage = make_stage("enigma", plugboard="A ABC 1Z")
        assert stage.apply("AAAAA") == "BDZGO"

    def test_never_maps_letter_to_itself(self, make_stage):
        message = "A" * 100
        assert "A" not in make_stage("enigma").apply(message)
