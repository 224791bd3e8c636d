import pytest

from bulkads.utils.id_fields import (
    expand_scientific_notation,
    is_scientific_notation,
    normalize_id_field,
)


@pytest.mark.parametrize("raw, expected", [
    ("1.04882E+14", "104882000000000"),
    ("7.24362E+14", "724362000000000"),
    ("5.688E+14", "568800000000000"),
    ("1.04882e14", "104882000000000"),
    ("1.23456789012345678E+19", "12345678901234567800"),
    ("120E-1", "12"),
])
def test_scientific_notation_is_rebuilt_exactly(raw, expected):
    assert normalize_id_field(raw) == expected


@pytest.mark.parametrize("raw, expected", [
    ("104882489141131", "104882489141131"),
    ('"724361597203916"', "724361597203916"),
    ("'724361597203916'", "724361597203916"),
    ('="568800062218281"', "568800062218281"),
    ("  104882489141131  ", "104882489141131"),
])
def test_wrapped_digits_are_unwrapped(raw, expected):
    assert normalize_id_field(raw) == expected


def test_other_shapes_are_returned_for_validation_to_reject():
    assert normalize_id_field("abc123") == "abc123"
    assert normalize_id_field("104882489141131_724361597203916") == "104882489141131_724361597203916"
    assert normalize_id_field("1.5E+0") == "1.5E+0"


def test_blank_values_normalize_to_empty_string():
    assert normalize_id_field(None) == ""
    assert normalize_id_field("") == ""
    assert normalize_id_field('=""') == ""


def test_fractional_results_are_not_treated_as_integers():
    assert expand_scientific_notation("1.25E+1") is None
    assert expand_scientific_notation("5E-3") is None
    assert expand_scientific_notation("not a number") is None


def test_is_scientific_notation():
    assert is_scientific_notation("1.04882E+14")
    assert is_scientific_notation('="1.04882E+14"')
    assert not is_scientific_notation("104882489141131")
    assert not is_scientific_notation("")


@pytest.mark.parametrize("raw", ["1E+999999999", "1E+200000000", "9.9E+21", "1E+" + "9" * 5000])
def test_oversized_exponents_are_not_expanded(raw):
    assert expand_scientific_notation(raw) is None
    assert normalize_id_field(raw) == raw


def test_twenty_digit_ids_still_expand():
    assert normalize_id_field("1E+19") == "1" + "0" * 19
