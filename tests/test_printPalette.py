import pytest
from PIL import Image

from conftest import build_gan
from gan_format import PALETTE_OFFSET
from palette_gan import decode_palette
from printPalette import create_palette_image, format_index, main


@pytest.mark.parametrize('value, base, expected', [
    (0, 10, '0'),
    (15, 10, '15'),
    (15, 16, 'F'),
    (5, 2, '101'),
    (35, 36, 'Z'),
])
def test_format_index(value, base, expected):
    assert format_index(value, base) == expected


@pytest.mark.parametrize('base', [1, 37])
def test_format_index_bad_base(base):
    with pytest.raises(ValueError):
        format_index(3, base)


def test_create_palette_image(ramp_colors):
    palette = decode_palette(build_gan(2, 2, colors=ramp_colors))
    img = create_palette_image(palette, swatch_size=20, columns=8)
    assert img.mode == 'RGBA'
    assert img.size == (160, 40)
    # swatch corners stay clear of the centred label
    assert img.getpixel((1, 1)) == (0, 0, 0, 0)
    assert img.getpixel((21, 1)) == tuple(palette[1])
    assert img.getpixel((20 * 7 + 1, 21)) == tuple(palette[15])


def test_main_writes_sheet(tmp_path, capsys):
    src = tmp_path / 'pic.gan'
    src.write_bytes(build_gan(2, 2, colors={1: (255, 0, 0)}))
    out = tmp_path / 'pal.png'
    assert main([str(src), str(out), '--base', '16']) == 0
    with Image.open(out) as img:
        assert img.size == (640, 40)
        assert img.getpixel((41, 1)) == (255, 0, 0, 255)
    assert 'index base 16' in capsys.readouterr().out


def test_main_rejects_unsigned_file(tmp_path, capsys):
    src = tmp_path / 'pic.gan'
    src.write_bytes(build_gan(2, 2, signature=b'GAN\x11'))
    assert main([str(src), str(tmp_path / 'pal.png')]) == 1
    assert not (tmp_path / 'pal.png').exists()
    assert 'signature mismatch at byte 3' in capsys.readouterr().out


def test_main_reports_truncated_palette(tmp_path, capsys):
    src = tmp_path / 'pic.gan'
    src.write_bytes(build_gan(2, 2)[:PALETTE_OFFSET + 10])
    assert main([str(src), str(tmp_path / 'pal.png')]) == 1
    assert not (tmp_path / 'pal.png').exists()
    assert 'buffer is only' in capsys.readouterr().out
