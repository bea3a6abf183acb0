"""Constants, pixel type and hash shared by the QOI encoder and decoder."""

from __future__ import annotations

from enum import IntEnum
from typing import NamedTuple, Sequence

INDEX_SIZE = 64
MAX_RUN_LENGTH = 62

OP_RGB = 0xFE
OP_RGBA = 0xFF

MAGIC = b"qoif"
HEADER_SIZE = 14
END_MARKER = bytes((0, 0, 0, 0, 0, 0, 0, 1))
MAX_PIXELS = 0xFFFFFFFF


class Tag(IntEnum):
    """Two-bit chunk tags stored in the top bits of an op byte."""

    INDEX = 0
    DIFF = 1
    LUMA = 2
    RUN = 3


class Pixel(NamedTuple):
    """An RGBA pixel with 8-bit channels."""

    r: int
    g: int
    b: int
    a: int = 255


START_PIXEL = Pixel(0, 0, 0, 255)
ZERO_PIXEL = Pixel(0, 0, 0, 0)


class QOIError(Exception):
    """Raised when an image cannot be encoded or decoded."""


def pixel_hash(pixel: Sequence[int]) -> int:
    """Return the slot of ``pixel`` in the 64-entry index of seen pixels."""
    r, g, b, a = pixel
    return (r * 3 + g * 5 + b * 7 + a * 11) % INDEX_SIZE