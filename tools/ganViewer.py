"""
GAN Image Viewer using Pygame

This script decodes a single .gan file and shows it in a Pygame window. The
image is drawn over a grey checkerboard so that pixels using palette index 0
(fully transparent) can be told apart from black ones.

Command Line Arguments:
    1. filename: Specifies the path to the .gan file.
    2. --scale (optional): An integer scale factor to enlarge the image.
       Default is 1 (no scaling).
    3. --odd-width (optional): legacy or strict, as for ganToPng.py.

Usage Examples:
    $ python3 ganViewer.py ../assets/title.gan
    $ python3 ganViewer.py ../assets/title.gan --scale 4

Close the window or press ESC to quit.
"""

import argparse
import sys
from pathlib import Path

import pygame

from gan_format import GanFormatError
from ganToPng import ODD_WIDTH_MODES, decode

CHECKER_SIZE = 8
CHECKER_COLORS = ((200, 200, 200), (150, 150, 150))


def parse_arguments(argv=None):
    parser = argparse.ArgumentParser(description="GAN Image Viewer")
    parser.add_argument("filename", help="Path to the .gan file")
    parser.add_argument("--scale", type=int, default=1, help="Scale factor for the image")
    parser.add_argument("--odd-width", choices=ODD_WIDTH_MODES, default="legacy",
                        help="Handling of odd image widths")
    return parser.parse_args(argv)


def surface_from_image(image, scale=1):
    """Build an RGBA surface from a decoded image, enlarged by an integer scale."""
    if scale < 1:
        raise ValueError("Scale must be at least 1")
    width, height = image.header
    surface = pygame.image.frombytes(bytes(image.pixels), (width, height), "RGBA")
    if scale > 1:
        surface = pygame.transform.scale(surface, (width * scale, height * scale))
    return surface


def draw_checkerboard(screen):
    screen_width, screen_height = screen.get_size()
    for y in range(0, screen_height, CHECKER_SIZE):
        for x in range(0, screen_width, CHECKER_SIZE):
            color = CHECKER_COLORS[(x // CHECKER_SIZE + y // CHECKER_SIZE) % 2]
            screen.fill(color, (x, y, CHECKER_SIZE, CHECKER_SIZE))


def main(argv=None):
    args = parse_arguments(argv)

    try:
        image = decode(Path(args.filename).read_bytes(), args.odd_width)
    except FileNotFoundError:
        print(f"Error: The file {args.filename} was not found.")
        return 1
    except GanFormatError as e:
        print(f"Error: {args.filename}: {e}")
        return 1

    width, height = image.header
    if width == 0 or height == 0:
        print(f"Error: {args.filename} has no pixels ({width}x{height})")
        return 1

    pygame.init()
    image_surface = surface_from_image(image, args.scale)
    screen = pygame.display.set_mode(image_surface.get_size())
    pygame.display.set_caption(f"GAN Viewer - File: {args.filename}, {width}x{height}, Scale: {args.scale}")
    image_surface = image_surface.convert_alpha()

    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                running = False

        draw_checkerboard(screen)
        screen.blit(image_surface, (0, 0))
        pygame.display.flip()

    pygame.quit()
    return 0


if __name__ == '__main__':
    sys.exit(main())
