"""Upper bounds on the serialized length of AT command arguments."""

from __future__ import annotations

_PRIMITIVE_LENGTHS = {
    "char": 1,
    "bool": 5,
    "isize": 19,
    "usize": 20,
    "u8": 3,
    "u16": 5,
    "u32": 10,
    "u64": 20,
    "u128": 39,
    "i8": 4,
    "i16": 6,
    "i32": 11,
    "i64": 20,
    "i128": 40,
    "f32": 42,
    "f64": 312,
}

# "0x" followed by hex digit pairs separated by ':'
_HEX_STR_LENGTHS = {
    "u8": 10,
    "u16": 18,
    "u32": 30,
    "u64": 66,
    "u128": 130,
}


def _check_count(name: str, value: int) -> None:
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {value!r}")


def atat_len(type_name: str) -> int:
    """Return the longest serialized form of a primitive type such as ``"u8"``."""
    try:
        return _PRIMITIVE_LENGTHS[type_name]
    except KeyError:
        raise ValueError(f"unknown primitive type {type_name!r}") from None


def string_len(capacity: int) -> int:
    """Return the length of a quoted string of at most ``capacity`` characters."""
    _check_count("capacity", capacity)
    return 1 + capacity + 1


def option_len(inner_len: int) -> int:
    """Return the length of an optional value: the same as the value itself."""
    _check_count("inner_len", inner_len)
    return inner_len


def vec_len(capacity: int, item_len: int) -> int:
    """Return the length of a sequence of up to ``capacity`` items."""
    _check_count("capacity", capacity)
    _check_count("item_len", item_len)
    return capacity * item_len


def hex_str_len(type_name: str) -> int:
    """Return the length of an integer written as a hex string."""
    try:
        return _HEX_STR_LENGTHS[type_name]
    except KeyError:
        raise ValueError(f"no hex string length for {type_name!r}") from None


def hex_str_array_len(size: int) -> int:
    """Return the length of a byte array of ``size`` bytes written as a hex string."""
    if size < 1:
        raise ValueError(f"size must be positive, got {size!r}")
    return (2 + size * 4 - 1) * 2