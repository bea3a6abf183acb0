"""QOI decoder."""

from __future__ import annotations

import struct
import warnings
from dataclasses import dataclass
from itertools import repeat
from typing import BinaryIO

from .format import (
    END_MARKER,
    HEADER_SIZE,
    INDEX_SIZE,
    MAGIC,
    MAX_PIXELS,
    OP_RGB,
    OP_RGBA,
    START_PIXEL,
    ZERO_PIXEL,
    Pixel,
    QOIError,
    Tag,
    pixel_hash,
)

_HEADER = struct.Struct(">4sIIBB")


class QOIDecodeError(QOIError):
    """Raised when a QOI stream is malformed or truncated."""


@dataclass(frozen=True)
class DecodedImage:
    """A decoded image: header fields and RGBA pixels in row order."""

    width: int
    height: int
    channels: int
    colorspace: int
    pixels: list[Pixel]


def _wrap(value: int) -> int:
    return value & 0xFF


def decode(data: bytes) -> DecodedImage:
    """Decode a complete QOI stream held in memory."""
    data = bytes(data)
    if len(data) < HEADER_SIZE:
        raise QOIDecodeError("could not read QOI header")

    magic, width, height, channels, colorspace = _HEADER.unpack_from(data)
    if magic != MAGIC:
        raise QOIDecodeError("invalid QOI magic bytes")
    if width == 0 or height == 0 or channels not in (3, 4):
        raise QOIDecodeError("invalid image dimensions or channels in header")
    total = width * height
    if total > MAX_PIXELS:
        raise QOIDecodeError("image dimensions too large")

    pixels: list[Pixel] = []
    index = [ZERO_PIXEL] * INDEX_SIZE
    previous = START_PIXEL
    pos = HEADER_SIZE
    end = len(data)

    def take(count: int, what: str) -> bytes:
        nonlocal pos
        if pos + count > end:
            raise QOIDecodeError(f"unexpected end of data reading {what}")
        chunk = data[pos:pos + count]
        pos += count
        return chunk

    while len(pixels) < total:
        if pos >= end:
            raise QOIDecodeError(
                f"unexpected end of data: decoded {len(pixels)} of {total} pixels"
            )
        op = data[pos]
        pos += 1
        count = 1

        if op == OP_RGB:
            r, g, b = take(3, "RGB payload")
            current = Pixel(r, g, b, previous.a)
        elif op == OP_RGBA:
            current = Pixel(*take(4, "RGBA payload"))
        else:
            tag = op >> 6
            if tag == Tag.INDEX:
                current = index[op & 0x3F]
            elif tag == Tag.DIFF:
                current = Pixel(
                    _wrap(previous.r + ((op >> 4) & 0x03) - 2),
                    _wrap(previous.g + ((op >> 2) & 0x03) - 2),
                    _wrap(previous.b + (op & 0x03) - 2),
                    previous.a,
                )
            elif tag == Tag.LUMA:
                (second,) = take(1, "LUMA second byte")
                dg = (op & 0x3F) - 32
                dr = ((second >> 4) & 0x0F) - 8 + dg
                db = (second & 0x0F) - 8 + dg
                current = Pixel(
                    _wrap(previous.r + dr),
                    _wrap(previous.g + dg),
                    _wrap(previous.b + db),
                    previous.a,
                )
            else:
                count = (op & 0x3F) + 1
                current = previous

        if len(pixels) + count > total:
            raise QOIDecodeError(
                "decoded more pixels than specified in header; stream may be corrupt"
            )
        pixels.extend(repeat(current, count))
        index[pixel_hash(current)] = current
        previous = current

    trailer = data[pos:pos + len(END_MARKER)]
    if len(trailer) == len(END_MARKER):
        if trailer != END_MARKER:
            warnings.warn(
                "end-of-stream marker mismatch; file might be corrupt or have extra data",
                stacklevel=2,
            )
        if pos + len(END_MARKER) < end:
            warnings.warn("additional data found after QOI end-of-stream marker", stacklevel=2)
    else:
        warnings.warn(
            f"could not fully read end-of-stream marker (read {len(trailer)} bytes of "
            f"{len(END_MARKER)}); file might be truncated",
            stacklevel=2,
        )

    return DecodedImage(width, height, channels, colorspace, pixels)


def decode_from_file(stream: BinaryIO) -> DecodedImage:
    """Decode a QOI image read from a binary stream."""
    return decode(stream.read())