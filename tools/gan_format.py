# gan_format.py
# ------------- fixed layout of a .gan container: signature check and header fields

import logging
from typing import NamedTuple

_log = logging.getLogger("gan")

# Layout constants (single format version, all offsets absolute)
SIGNATURE_OFFSET = 0x000
SIGNATURE_LENGTH = 4
WIDTH_OFFSET     = 0x424
HEIGHT_OFFSET    = 0x426
PALETTE_OFFSET   = 0x430
IMAGE_OFFSET     = 0x470

PALETTE_SIZE       = 64
PIXEL_STRIDE       = 4
NUM_PALETTE_COLORS = PALETTE_SIZE // PIXEL_STRIDE

SIGNATURE = bytes((0x47, 0x41, 0x4E, 0x10))   # b'GAN\x10'


class GanFormatError(ValueError):
    """Base class for anything wrong with a .gan buffer."""


class SignatureError(GanFormatError):
    def __init__(self, index: int):
        super().__init__(f'signature mismatch at byte {index}')
        self.index = index


class TruncatedInputError(GanFormatError):
    def __init__(self, offset: int, length: int, size: int):
        super().__init__(f'need {length} byte(s) at 0x{offset:03X}, '
                         f'buffer is only {size} bytes')
        self.offset = offset
        self.length = length
        self.size = size


class UnsupportedWidthError(GanFormatError):
    def __init__(self, width: int):
        super().__init__(f'odd width {width} cannot be nibble-paired')
        self.width = width


class EmptyImageError(GanFormatError):
    def __init__(self, width: int, height: int):
        super().__init__(f'image has no pixels ({width}x{height})')
        self.width = width
        self.height = height


class Header(NamedTuple):
    width: int
    height: int


class ByteView:
    """
    Read-only window over the raw bytes of one file.

    Every read is bounds-checked and raises TruncatedInputError instead of
    running off the end of the buffer.
    """

    __slots__ = ('_data',)

    def __init__(self, data):
        self._data = bytes(data)

    def __len__(self):
        return len(self._data)

    def require(self, offset: int, length: int) -> None:
        if offset < 0 or length < 0 or offset + length > len(self._data):
            raise TruncatedInputError(offset, length, len(self._data))

    def u8(self, offset: int) -> int:
        self.require(offset, 1)
        return self._data[offset]

    def u16le(self, offset: int) -> int:
        self.require(offset, 2)
        return int.from_bytes(self._data[offset:offset + 2], 'little')

    def slice(self, offset: int, length: int) -> bytes:
        self.require(offset, length)
        return self._data[offset:offset + length]


def as_view(buffer) -> ByteView:
    return buffer if isinstance(buffer, ByteView) else ByteView(buffer)


def signature_mismatch(buffer):
    """
    Index (0-3) of the first signature byte that does not match, or None.
    Bytes missing because the buffer is too short count as mismatches.
    """
    view = as_view(buffer)
    for i, expected in enumerate(SIGNATURE):
        offset = SIGNATURE_OFFSET + i
        if offset >= len(view) or view.u8(offset) != expected:
            return i
    return None


def validate(buffer) -> bool:
    index = signature_mismatch(buffer)
    if index is not None:
        _log.debug('signature mismatch at byte %d', index)
    return index is None


def read_header(buffer) -> Header:
    """Width and height are separate u16 LE fields; no check against the bitmap size."""
    view = as_view(buffer)
    header = Header(view.u16le(WIDTH_OFFSET), view.u16le(HEIGHT_OFFSET))
    _log.debug('header %dx%d', header.width, header.height)
    return header
