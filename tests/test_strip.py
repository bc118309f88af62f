from __future__ import annotations

import pytest

from sixelgrid.protocol import decode_strip, is_drawing_byte


def test_lowest_data_byte_has_no_rows_set() -> None:
    assert decode_strip(0x3F) == (False, False, False, False, False, False)


def test_highest_data_byte_sets_every_row() -> None:
    assert decode_strip(0x7E) == (True, True, True, True, True, True)


@pytest.mark.parametrize(
    "byte, expected",
    [
        (ord("@"), (True, False, False, False, False, False)),
        (ord("A"), (False, True, False, False, False, False)),
        (ord("B"), (True, True, False, False, False, False)),
        (ord("_"), (False, False, False, False, False, True)),
        (ord("N"), (True, True, True, True, False, False)),
    ],
)
def test_bits_map_to_rows_least_significant_first(byte: int, expected: tuple) -> None:
    assert decode_strip(byte) == expected


def test_mapping_is_bijective_over_six_bits() -> None:
    masks = {decode_strip(byte) for byte in range(0x3F, 0x7F)}
    assert len(masks) == 64
    for byte in range(0x3F, 0x7F):
        mask = decode_strip(byte)
        value = sum(1 << bit for bit, set_ in enumerate(mask) if set_)
        assert value == byte - 0x3F


@pytest.mark.parametrize("byte", [0x00, 0x21, 0x3E, 0x7F, 0xFF])
def test_bytes_outside_data_range_are_rejected(byte: int) -> None:
    assert not is_drawing_byte(byte)
    with pytest.raises(ValueError):
        decode_strip(byte)
