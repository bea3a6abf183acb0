import random

import pytest

from qoicodec.format import INDEX_SIZE, Pixel, ZERO_PIXEL, pixel_hash


def _sample_pixels(count=500, seed=7):
    rng = random.Random(seed)
    return [Pixel(*(rng.randrange(256) for _ in range(4))) for _ in range(count)]


def test_hash_stays_inside_index():
    assert all(0 <= pixel_hash(p) < INDEX_SIZE for p in _sample_pixels())


def test_hash_of_zero_pixel_is_zero():
    assert pixel_hash(ZERO_PIXEL) == 0


def test_hash_pins_red_and_alpha_weights():
    assert pixel_hash(Pixel(1, 0, 0, 0)) == 3
    assert pixel_hash(Pixel(0, 0, 0, 1)) == 11


@pytest.mark.parametrize("channel", range(4))
def test_hash_unchanged_by_adding_index_size_to_a_channel(channel):
    for pixel in _sample_pixels(200, seed=channel):
        values = list(pixel)
        values[channel] %= 256 - INDEX_SIZE
        base = Pixel(*values)
        values[channel] += INDEX_SIZE
        assert pixel_hash(Pixel(*values)) == pixel_hash(base)


def test_hash_accepts_plain_tuples():
    assert pixel_hash((12, 34, 56, 78)) == pixel_hash(Pixel(12, 34, 56, 78))


def test_pixel_defaults_to_opaque():
    assert Pixel(1, 2, 3) == (1, 2, 3, 255)