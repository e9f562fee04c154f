"""
Generate a PNG displaying each color of a .gan palette with its index.

Index 0 is the transparent entry and is left transparent in the output.

Usage:
    python printPalette.py picture.gan palette.png --base 16
"""
import argparse
import sys
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

from gan_format import GanFormatError, signature_mismatch
from palette_gan import decode_palette


def format_index(value, base):
    """Convert an integer to its string representation in the given base (2-36)."""
    if base < 2 or base > 36:
        raise ValueError("Base must be between 2 and 36")
    digits = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    if value == 0:
        return "0"
    result = ''
    n = value
    while n > 0:
        n, rem = divmod(n, base)
        result = digits[rem] + result
    return result


def create_palette_image(palette, swatch_size=40, columns=16, base=10):
    """Create an RGBA image with one labelled swatch per palette entry."""
    rows = (len(palette) + columns - 1) // columns
    width = columns * swatch_size
    height = rows * swatch_size

    img = Image.new('RGBA', (width, height), (0, 0, 0, 0))
    draw = ImageDraw.Draw(img)
    font = ImageFont.load_default()

    for idx, color in enumerate(palette):
        x = (idx % columns) * swatch_size
        y = (idx // columns) * swatch_size
        draw.rectangle([x, y, x + swatch_size - 1, y + swatch_size - 1], fill=tuple(color))
        text = format_index(idx, base)
        bbox = draw.textbbox((0, 0), text, font=font)
        tw = bbox[2] - bbox[0]
        th = bbox[3] - bbox[1]
        # Center text in swatch
        tx = x + (swatch_size - tw) / 2
        ty = y + (swatch_size - th) / 2
        draw.text((tx, ty), text, fill=(255, 255, 255, 255), font=font)

    return img


def main(argv=None):
    parser = argparse.ArgumentParser(description="Generate a PNG showing the palette of a .gan file")
    parser.add_argument('gan_file', help='Path to the .gan file')
    parser.add_argument('output_file', help='Output PNG filename')
    parser.add_argument('--swatch-size', type=int, default=40, help='Size of each color swatch')
    parser.add_argument('--columns', type=int, default=16, help='Number of columns per row')
    parser.add_argument('--base', type=int, default=10, help='Numeral base for index labels (2-36)')
    args = parser.parse_args(argv)

    data = Path(args.gan_file).read_bytes()
    index = signature_mismatch(data)
    if index is not None:
        print(f"Invalid file {args.gan_file}: signature mismatch at byte {index}")
        return 1

    try:
        palette = decode_palette(data)
    except GanFormatError as e:
        print(f"Error: {args.gan_file}: {e}")
        return 1

    img = create_palette_image(
        palette,
        swatch_size=args.swatch_size,
        columns=args.columns,
        base=args.base
    )
    img.save(args.output_file, format='PNG')
    print(f"Saved palette image to {args.output_file} with index base {args.base}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
