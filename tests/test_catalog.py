"""Tests for the transform registry and catalog."""

import pytest

from cipher_pipeline import (
    CATEGORIES,
    TRANSFORM_REGISTRY,
    Transform,
    catalog,
    create_transform,
    register_transform,
)
from cipher_pipeline.settings import describe

BUILT_IN = [
    "replace", "reverse", "case_transform", "numeral", "bitwise",
    "morse", "spelling",
    "caesar", "affine", "rot13", "a1z26", "vigenere", "bacon", "substitution",
    "rail_fence", "enigma",
    "polybius", "tap_code", "adfgx", "bifid", "nihilist", "trifid",
    "base32", "base64", "ascii85", "baudot", "unicode", "url", "punycode",
    "bootstring", "integer", "reed_solomon",
    "block_cipher", "rc4", "hash", "hmac",
]

SAMPLE = "Hello, World! 123 ü\n"


def test_every_built_in_is_registered():
    assert set(BUILT_IN) <= set(TRANSFORM_REGISTRY)


def test_unknown_id():
    assert create_transform("no_such_transform") is None


def test_instances_are_fresh():
    first = create_transform("caesar")
    second = create_transform("caesar")

    assert first is not second
    assert type(first) is type(second)


@pytest.mark.parametrize("name", BUILT_IN)
def test_identity_matches_registry_key(name):
    stage = create_transform(name)

    assert stage.name == name
    assert stage.display_name
    assert stage.category in CATEGORIES


@pytest.mark.parametrize("name", BUILT_IN)
def test_apply_is_total_in_every_mode(name):
    stage = create_transform(name)
    modes = [field.options for field in describe(stage) if field.key == "mode"]
    values = [value for value, _ in modes[0]] if modes else [None]

    for value in values:
        if value is not None:
            stage.mode = value
        assert isinstance(stage.apply(""), str)
        assert isinstance(stage.apply(SAMPLE), str)


def test_catalog_is_grouped_in_menu_order():
    ranks = [CATEGORIES.index(entry.category) for entry in catalog()
             if entry.category in CATEGORIES]

    assert ranks == sorted(ranks)
    assert {entry.name for entry in catalog()} == set(TRANSFORM_REGISTRY)


def test_catalog_entry_fields():
    entry = next(entry for entry in catalog() if entry.name == "caesar")

    assert entry.display_name == "Caesar Cipher"
    assert entry.category == "Ciphers"
    assert entry.description


def test_settings_snapshot():
    assert create_transform("caesar").settings() == {"mode": "encode", "shift": 1}
    assert create_transform("reverse").settings() == {}


def test_register_transform_adds_factory(restore_registry):

    @register_transform
    class Shout(Transform):
        name = "shout"
        display_name = "Shout"
        category = "Somewhere Else"

        def apply(self, text):
            return text.upper() + "!"

    assert create_transform("shout").apply("hey") == "HEY!"
    assert catalog()[-1].name == "shout"
