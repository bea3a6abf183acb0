import io
import random

import pytest

from qoicodec.decoder import decode
from qoicodec.encoder import encode, encode_to_file
from qoicodec.format import (
    END_MARKER,
    HEADER_SIZE,
    MAGIC,
    OP_RGB,
    OP_RGBA,
    START_PIXEL,
    Pixel,
    QOIError,
)


def _body(data):
    return data[HEADER_SIZE:-len(END_MARKER)]


def test_header_layout():
    data = encode([Pixel(1, 2, 3, 255)] * 6, 3, 2, 4, 1)
    expected = MAGIC + (3).to_bytes(4, "big") + (2).to_bytes(4, "big") + bytes([4, 1])
    assert data[:HEADER_SIZE] == expected


def test_stream_ends_with_marker():
    data = encode([Pixel(9, 8, 7, 6)], 1, 1, 4, 0)
    assert data.endswith(END_MARKER)


def test_start_pixel_becomes_single_run():
    assert _body(encode([START_PIXEL], 1, 1, 4, 0)) == bytes([0xC0])


def test_far_colour_uses_rgb_op():
    pixel = Pixel(100, 50, 25, 255)
    assert _body(encode([pixel], 1, 1, 3, 0)) == bytes([OP_RGB, 100, 50, 25])


def test_alpha_change_uses_rgba_op():
    pixel = Pixel(1, 2, 3, 4)
    assert _body(encode([pixel], 1, 1, 4, 0)) == bytes([OP_RGBA, 1, 2, 3, 4])


def test_run_of_max_length_is_one_chunk():
    assert len(_body(encode([START_PIXEL] * 62, 62, 1, 4, 0))) == 1


def test_run_longer_than_max_splits():
    data = encode([START_PIXEL] * 63, 63, 1, 4, 0)
    assert len(_body(data)) == 2
    assert decode(data).pixels == [START_PIXEL] * 63


def test_small_difference_is_shorter_than_rgb():
    pixels = [Pixel(1, 0, 0, 255)]
    data = encode(pixels, 1, 1, 4, 0)
    assert len(_body(data)) < 4
    assert decode(data).pixels == pixels


def test_luma_difference_round_trips_compactly():
    pixels = [Pixel(10, 12, 14, 255)]
    data = encode(pixels, 1, 1, 4, 0)
    assert len(_body(data)) < 4
    assert decode(data).pixels == pixels


def test_repeated_colour_uses_index():
    a = Pixel(200, 10, 90, 255)
    b = Pixel(20, 180, 5, 255)
    data = encode([a, b, a], 3, 1, 4, 0)
    two = encode([a, b], 2, 1, 4, 0)
    assert len(_body(data)) == len(_body(two)) + 1
    assert decode(data).pixels == [a, b, a]


def test_raw_bytes_match_pixel_list():
    rng = random.Random(3)
    pixels = [Pixel(*(rng.randrange(256) for _ in range(4))) for _ in range(20)]
    raw = b"".join(bytes(p) for p in pixels)
    assert encode(raw, 5, 4, 4, 0) == encode(pixels, 5, 4, 4, 0)


def test_extra_pixels_are_ignored():
    pixels = [Pixel(5, 5, 5, 255)] * 4
    assert encode(pixels + [Pixel(1, 1, 1, 1)], 2, 2, 4, 0) == encode(pixels, 2, 2, 4, 0)


def test_encode_to_file_writes_encoded_bytes():
    pixels = [Pixel(i, 255 - i, i // 2, 255) for i in range(16)]
    stream = io.BytesIO()
    written = encode_to_file(pixels, 4, 4, 4, 0, stream)
    assert stream.getvalue() == encode(pixels, 4, 4, 4, 0)
    assert written == len(stream.getvalue())


@pytest.mark.parametrize("width,height", [(0, 1), (1, 0), (0, 0)])
def test_zero_dimension_rejected(width, height):
    with pytest.raises(QOIError):
        encode([START_PIXEL], width, height, 4, 0)


def test_too_few_pixels_rejected():
    with pytest.raises(QOIError):
        encode([START_PIXEL] * 3, 2, 2, 4, 0)


def test_out_of_range_component_rejected():
    with pytest.raises(QOIError):
        encode([(0, 0, 256, 255)], 1, 1, 4, 0)