#!/usr/bin/env python3
"""
ganToPng.py  –  convert every .gan image under a directory to PNG.
usage: python ganToPng.py ROOT [options]

A .gan file is a fixed-layout container:
    - Bytes 0x000-0x003 hold the signature 47 41 4E 10 ("GAN\\x10").
    - Bytes 0x424/0x426 hold width and height (u16, little-endian).
    - Bytes 0x430-0x46F hold 16 palette slots of 4 bytes. Slot 0 is never
      read (index 0 is transparent), slots 1-15 are RGB plus an unused byte.
    - From 0x470 on, the bitmap: 4 bits per pixel, two pixels per byte, the
      low nibble being the left pixel of each pair.

Every regular file below ROOT is tried. Files without the signature are
skipped, everything else is written as <name>.png next to the input.

Options
-------
--odd-width MODE  legacy (default) keeps the nibble pairing for odd widths,
                  strict refuses odd widths
--dry-run         decode only, write nothing
--verbose         print header and palette of each converted file
--quiet           only print the summary line

Set GAN_DEBUG=1 for decoder debug traces.
"""

import argparse
import contextlib
import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import NamedTuple

from PIL import Image

from gan_format import (IMAGE_OFFSET, PIXEL_STRIDE, EmptyImageError,
                        GanFormatError, Header, SignatureError,
                        UnsupportedWidthError, as_view, read_header,
                        signature_mismatch)
from palette_gan import decode_palette, format_palette

_log = logging.getLogger("gan")

ODD_WIDTH_MODES = ('legacy', 'strict')

CONVERTED = 'converted'
SKIPPED   = 'skipped'
FAILED    = 'failed'


class DecodedImage(NamedTuple):
    header: Header
    palette: tuple
    pixels: bytearray


# ------------------------------------------------------------------ unpacker
def unpack(buffer, header: Header, palette, odd_width: str = 'legacy') -> bytearray:
    """
    Expand the 4-bit bitmap into width*height RGBA pixels.

    Pixels are taken in pairs (x, x+1); the byte for a pair is found from the
    linear index of its left pixel, so for an odd width the right half of the
    last pair lands on the first pixel of the next row, which that row then
    overwrites. On the last row that pixel is outside the image and dropped.
    """
    if odd_width not in ODD_WIDTH_MODES:
        raise ValueError(f'unknown odd width mode: {odd_width!r}')
    width, height = header
    if width % 2 and odd_width == 'strict':
        raise UnsupportedWidthError(width)

    count  = width * height
    bitmap = as_view(buffer).slice(IMAGE_OFFSET, (count + 1) // 2)
    pixels = bytearray(count * PIXEL_STRIDE)

    for y in range(height):
        for x in range(0, width, 2):
            i1 = y * width + x
            i2 = i1 + 1

            byte = bitmap[i1 >> 1]
            o1 = i1 * PIXEL_STRIDE
            pixels[o1:o1 + PIXEL_STRIDE] = palette[byte & 0x0F]
            if i2 < count:
                o2 = i2 * PIXEL_STRIDE
                pixels[o2:o2 + PIXEL_STRIDE] = palette[byte >> 4]

    if width % 2:
        _log.debug('odd width %d decoded with legacy pairing', width)
    return pixels


def decode(data, odd_width: str = 'legacy') -> DecodedImage:
    view = as_view(data)
    index = signature_mismatch(view)
    if index is not None:
        raise SignatureError(index)
    header  = read_header(view)
    palette = decode_palette(view)
    pixels  = unpack(view, header, palette, odd_width)
    return DecodedImage(header, palette, pixels)


# ----------------------------------------------------------- source and sink
def read_bytes(path: Path) -> bytes:
    return Path(path).read_bytes()


def check_writable(width: int, height: int) -> None:
    if width == 0 or height == 0:
        raise EmptyImageError(width, height)


def write_png(dst: Path, width: int, height: int, pixels) -> None:
    """Row stride is width*4, rows top to bottom."""
    check_writable(width, height)
    image = Image.frombytes('RGBA', (width, height), bytes(pixels))
    image.save(dst, format='PNG')


# ------------------------------------------------------------- batch driver
@dataclass(frozen=True)
class FileResult:
    path: Path
    status: str
    output: Path | None = None
    reason: str = ''


@dataclass
class BatchSummary:
    results: list = field(default_factory=list)

    def _count(self, status):
        return sum(1 for r in self.results if r.status == status)

    @property
    def converted(self):
        return self._count(CONVERTED)

    @property
    def skipped(self):
        return self._count(SKIPPED)

    @property
    def failed(self):
        return self._count(FAILED)


def convert_file(path: Path, odd_width: str = 'legacy', dry_run: bool = False,
                 verbose: bool = False) -> FileResult:
    try:
        data = read_bytes(path)
    except OSError as e:
        return FileResult(path, FAILED, reason=f'read error: {e}')

    try:
        image = decode(data, odd_width)
    except SignatureError as e:
        return FileResult(path, SKIPPED, reason=str(e))
    except GanFormatError as e:
        return FileResult(path, FAILED, reason=str(e))

    width, height = image.header
    if verbose:
        print(f"{path.name}: {width}x{height}")
        for line in format_palette(image.palette):
            print("   ", line)

    try:
        check_writable(width, height)
    except GanFormatError as e:
        return FileResult(path, FAILED, reason=str(e))

    output = path.with_suffix('.png')
    if dry_run:
        return FileResult(path, CONVERTED, reason='dry run')
    try:
        write_png(output, width, height, image.pixels)
    except OSError as e:
        # no partial PNG left behind for a failed file
        with contextlib.suppress(OSError):
            output.unlink(missing_ok=True)
        return FileResult(path, FAILED, reason=f'write error: {e}')
    return FileResult(path, CONVERTED, output=output)


def report(result: FileResult) -> None:
    if result.status == CONVERTED:
        target = result.output.name if result.output else result.reason
        print(f"Converted {result.path} → {target}")
    elif result.status == SKIPPED:
        print(f"Skipping invalid file: {result.path.name} ({result.reason})")
    else:
        print(f"Failed {result.path}: {result.reason}")


def convert_tree(root, odd_width: str = 'legacy', dry_run: bool = False,
                 verbose: bool = False, quiet: bool = False) -> BatchSummary:
    root = Path(root)
    if not root.is_dir():
        raise NotADirectoryError(f"Invalid directory: {root}")

    # snapshot first so PNGs written during the run are not revisited
    files = sorted(p for p in root.rglob('*') if p.is_file())

    summary = BatchSummary()
    for path in files:
        result = convert_file(path, odd_width, dry_run, verbose)
        summary.results.append(result)
        if not quiet:
            report(result)
    return summary


# ---------------------------------------------------------------------- main
def parse_arguments(argv=None):
    p = argparse.ArgumentParser(
        description='Convert every .gan image under a directory to PNG.')
    p.add_argument('root', help='directory to scan recursively')
    p.add_argument('--odd-width', choices=ODD_WIDTH_MODES, default='legacy',
                   help='handling of odd image widths  (default: %(default)s)')
    p.add_argument('--dry-run', action='store_true',
                   help='decode only, do not write PNG files')
    p.add_argument('--verbose', action='store_true',
                   help='print header and palette of each file')
    p.add_argument('--quiet', action='store_true',
                   help='only print the summary line')
    return p.parse_args(argv)


def main(argv=None) -> int:
    args = parse_arguments(argv)
    if os.environ.get('GAN_DEBUG', '') == '1':
        logging.basicConfig(level=logging.DEBUG, format='%(name)s: %(message)s')

    try:
        summary = convert_tree(args.root, args.odd_width, args.dry_run,
                               args.verbose, args.quiet)
    except NotADirectoryError as e:
        print(e)
        return 2

    print(f"{summary.converted} converted, {summary.skipped} skipped, "
          f"{summary.failed} failed")
    return 1 if summary.failed else 0


if __name__ == '__main__':
    sys.exit(main())
