import pytest

from atcmd.lengths import (
    atat_len,
    hex_str_array_len,
    hex_str_len,
    option_len,
    string_len,
    vec_len,
)


@pytest.mark.parametrize(
    "type_name, expected",
    [
        ("char", 1),
        ("bool", 5),
        ("isize", 19),
        ("usize", 20),
        ("u8", 3),
        ("u16", 5),
        ("u32", 10),
        ("u64", 20),
        ("u128", 39),
        ("i8", 4),
        ("i16", 6),
        ("i32", 11),
        ("i64", 20),
        ("i128", 40),
        ("f32", 42),
        ("f64", 312),
    ],
)
def test_primitive_lengths(type_name, expected):
    assert atat_len(type_name) == expected


@pytest.mark.parametrize(
    "type_name, expected",
    [("u8", 10), ("u16", 18), ("u32", 30), ("u64", 66), ("u128", 130)],
)
def test_hex_str_lengths(type_name, expected):
    assert hex_str_len(type_name) == expected


def test_hex_str_array_of_sixteen_bytes():
    assert hex_str_array_len(16) == 130


def test_string_len_adds_quotes():
    assert string_len(128) == 1 + 128 + 1
    assert string_len(150) == 1 + 150 + 1
    assert string_len(10) == 1 + 10 + 1


def test_option_has_inner_length():
    assert option_len(atat_len("u8")) == atat_len("u8")


def test_vec_len_multiplies():
    assert vec_len(5, atat_len("u32")) == 10 * 5
    assert vec_len(0, atat_len("u32")) == 0


def test_length_tester_struct_total():
    # fields x: u8, y: String<128>, z (len 2), w (len 150 str), a: u8 enum,
    # b: u32 enum, c (len 3), plus one separator between each of the 7 fields
    fields = [
        atat_len("u8"),
        string_len(128),
        2,
        string_len(150),
        atat_len("u8"),
        atat_len("u32"),
        3,
    ]
    total = sum(fields) + len(fields) - 1
    assert total == (3 + (1 + 128 + 1) + 2 + (1 + 150 + 1) + 3 + 10 + 3) + 6


def test_mixed_enum_widest_variant():
    # discriminant u8, then u8, String<10>, i64, u32 enum, with separators
    fields = [atat_len("u8"), atat_len("u8"), string_len(10), atat_len("i64"), atat_len("u32")]
    assert sum(fields) + len(fields) - 1 == (3 + 3 + (1 + 10 + 1) + 20 + 10) + 4


def test_unknown_type_rejected():
    with pytest.raises(ValueError):
        atat_len("u7")
    with pytest.raises(ValueError):
        hex_str_len("i8")


def test_invalid_counts_rejected():
    with pytest.raises(ValueError):
        string_len(-1)
    with pytest.raises(ValueError):
        vec_len(-2, 3)
    with pytest.raises(ValueError):
        hex_str_array_len(0)