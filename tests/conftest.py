import pytest

from gan_format import (HEIGHT_OFFSET, IMAGE_OFFSET, PALETTE_OFFSET,
                        PIXEL_STRIDE, SIGNATURE, WIDTH_OFFSET)


def pack_indices(indices):
    """Two indices per byte, low nibble first; an odd tail leaves the high nibble 0."""
    out = bytearray()
    for i in range(0, len(indices), 2):
        lo = indices[i]
        hi = indices[i + 1] if i + 1 < len(indices) else 0
        out.append(lo | (hi << 4))
    return bytes(out)


def build_gan(width, height, colors=None, bitmap=b'', signature=SIGNATURE):
    """
    colors maps palette slot -> (r, g, b) or (r, g, b, x); the bitmap is
    appended after the fixed header area.
    """
    data = bytearray(IMAGE_OFFSET)
    data[0:len(signature)] = signature
    data[WIDTH_OFFSET:WIDTH_OFFSET + 2] = width.to_bytes(2, 'little')
    data[HEIGHT_OFFSET:HEIGHT_OFFSET + 2] = height.to_bytes(2, 'little')
    for slot, color in (colors or {}).items():
        entry = bytes(color) + b'\x00' * (PIXEL_STRIDE - len(color))
        offset = PALETTE_OFFSET + slot * PIXEL_STRIDE
        data[offset:offset + PIXEL_STRIDE] = entry
    return bytes(data) + bytes(bitmap)


def ramp(i):
    return (i * 16, i * 8, 255 - i * 16)


@pytest.fixture
def ramp_colors():
    """Distinct, non-black colors for slots 1-15."""
    return {i: ramp(i) for i in range(1, 16)}
