import pytest

from conftest import build_gan
from gan_format import NUM_PALETTE_COLORS, PALETTE_OFFSET, TruncatedInputError
from palette_gan import TRANSPARENT, decode_palette, format_palette


def test_slot_zero_is_always_transparent():
    data = build_gan(2, 2, colors={0: (9, 9, 9, 9), 1: (1, 2, 3)})
    palette = decode_palette(data)
    assert palette[0] == TRANSPARENT == bytes((0, 0, 0, 0))


def test_alpha_forced_opaque(ramp_colors):
    colors = {i: rgb + (i,) for i, rgb in ramp_colors.items()}
    palette = decode_palette(build_gan(2, 2, colors=colors))
    assert len(palette) == NUM_PALETTE_COLORS
    for i in range(1, 16):
        assert palette[i] == bytes(ramp_colors[i] + (255,))


def test_unset_slots_are_opaque_black():
    palette = decode_palette(build_gan(2, 2, colors={1: (255, 0, 0)}))
    assert palette[1] == b'\xff\x00\x00\xff'
    assert palette[2] == b'\x00\x00\x00\xff'


def test_palette_truncated():
    data = build_gan(2, 2)[:PALETTE_OFFSET + 63]
    with pytest.raises(TruncatedInputError):
        decode_palette(data)


def test_format_palette():
    palette = decode_palette(build_gan(2, 2, colors={1: (255, 0, 0)}))
    lines = format_palette(palette)
    assert len(lines) == 17
    assert lines[1] == '0x00 : (0, 0, 0, 0)'
    assert lines[2] == '0x01 : (255, 0, 0, 255)'
