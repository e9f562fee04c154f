# palette_gan.py
# --------------- read the 16-entry palette of a .gan file as RGBA bytes

import logging

from gan_format import PALETTE_OFFSET, PIXEL_STRIDE, NUM_PALETTE_COLORS, as_view

_log = logging.getLogger("gan")

TRANSPARENT = bytes((0, 0, 0, 0))


def decode_palette(buffer) -> tuple:
    """
    Returns 16 four-byte RGBA entries.

    Index 0 is always transparent black and is never read from the file.
    Indices 1-15 take R, G, B from the first three bytes of their 4-byte slot
    at PALETTE_OFFSET; the stored 4th byte is ignored and alpha is 255.
    """
    view = as_view(buffer)
    view.require(PALETTE_OFFSET, NUM_PALETTE_COLORS * PIXEL_STRIDE)

    palette = [TRANSPARENT]
    for i in range(1, NUM_PALETTE_COLORS):
        offset = PALETTE_OFFSET + i * PIXEL_STRIDE
        r, g, b = view.slice(offset, 3)
        palette.append(bytes((r, g, b, 0xFF)))
    _log.debug('palette decoded, entry 1 = %s', palette[1].hex())
    return tuple(palette)


def format_palette(palette):
    lines = [f"{'ID':<5}: {'RGBA'}"]
    for id, color in enumerate(palette):
        r, g, b, a = color
        lines.append(f"0x{id:02X} : ({r}, {g}, {b}, {a})")
    return lines
