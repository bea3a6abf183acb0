"""QOI encoder."""

from __future__ import annotations

import struct
from itertools import islice
from typing import BinaryIO, Iterable, Sequence, Union

from .format import (
    END_MARKER,
    INDEX_SIZE,
    MAGIC,
    MAX_PIXELS,
    MAX_RUN_LENGTH,
    OP_RGB,
    OP_RGBA,
    START_PIXEL,
    ZERO_PIXEL,
    Pixel,
    QOIError,
    Tag,
    pixel_hash,
)

PixelSource = Union[bytes, bytearray, memoryview, Iterable[Sequence[int]]]

_HEADER = struct.Struct(">4sIIBB")


def _chunk(tag: Tag, payload: int) -> int:
    return (tag << 6) | payload


def _collect_pixels(pixels: PixelSource, count: int) -> list[Pixel]:
    if isinstance(pixels, (bytes, bytearray, memoryview)):
        raw = bytes(pixels)[: count * 4]
        collected = [Pixel(*quad) for quad in struct.iter_unpack("4B", raw[: len(raw) // 4 * 4])]
    else:
        collected = []
        for item in islice(pixels, count):
            pixel = Pixel(*item)
            if any(not 0 <= value <= 255 for value in pixel):
                raise QOIError(f"pixel component out of range: {tuple(pixel)}")
            collected.append(pixel)
    if len(collected) < count:
        raise QOIError(f"expected {count} pixels, got {len(collected)}")
    return collected


def encode(
    pixels: PixelSource,
    width: int,
    height: int,
    channels: int,
    colorspace: int,
) -> bytes:
    """Encode ``width * height`` RGBA pixels as a QOI image.

    ``pixels`` is either raw RGBA bytes or an iterable of 4-component pixels.
    """
    if width <= 0 or height <= 0:
        raise QOIError("image width and height must be positive")
    if width * height > MAX_PIXELS:
        raise QOIError("image dimensions too large")
    if not 0 <= channels <= 255 or not 0 <= colorspace <= 255:
        raise QOIError("channels and colorspace must fit in one byte")

    image = _collect_pixels(pixels, width * height)

    out = bytearray(_HEADER.pack(MAGIC, width, height, channels, colorspace))
    index = [ZERO_PIXEL] * INDEX_SIZE
    previous = START_PIXEL
    run = 0

    for pixel in image:
        if pixel == previous:
            run += 1
            if run == MAX_RUN_LENGTH:
                out.append(_chunk(Tag.RUN, run - 1))
                run = 0
        else:
            if run:
                out.append(_chunk(Tag.RUN, run - 1))
                run = 0

            slot = pixel_hash(pixel)
            if index[slot] == pixel:
                out.append(_chunk(Tag.INDEX, slot))
            elif pixel.a != previous.a:
                out += bytes((OP_RGBA, *pixel))
            else:
                dr = pixel.r - previous.r
                dg = pixel.g - previous.g
                db = pixel.b - previous.b
                dr_dg = dr - dg
                db_dg = db - dg
                if all(-2 <= d <= 1 for d in (dr, dg, db)):
                    payload = ((dr + 2) << 4) | ((dg + 2) << 2) | (db + 2)
                    out.append(_chunk(Tag.DIFF, payload))
                elif -32 <= dg <= 31 and -8 <= dr_dg <= 7 and -8 <= db_dg <= 7:
                    out.append(_chunk(Tag.LUMA, dg + 32))
                    out.append(((dr_dg + 8) << 4) | (db_dg + 8))
                else:
                    out += bytes((OP_RGB, pixel.r, pixel.g, pixel.b))
            index[slot] = pixel
        previous = pixel

    if run:
        out.append(_chunk(Tag.RUN, run - 1))

    out += END_MARKER
    return bytes(out)


def encode_to_file(
    pixels: PixelSource,
    width: int,
    height: int,
    channels: int,
    colorspace: int,
    stream: BinaryIO,
) -> int:
    """Encode an image and write it to a binary stream; return bytes written."""
    data = encode(pixels, width, height, channels, colorspace)
    stream.write(data)
    return len(data)