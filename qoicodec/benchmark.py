"""Command-line benchmark: PNG -> QOI -> RGBA, with size and speed statistics."""

from __future__ import annotations

import os
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Union

from PIL import Image

from .decoder import DecodedImage, decode_from_file
from .encoder import encode_to_file
from .format import QOIError

PathLike = Union[str, "os.PathLike[str]"]

_USAGE = "Usage: qoicodec-benchmark <input.png> <output.qoi> [decoded_output.png]"


@dataclass(frozen=True)
class _BenchmarkStats:
    width: int
    height: int
    original_channels: int
    raw_size: int
    qoi_size: Optional[int]
    png_size: Optional[int]
    encode_seconds: float
    decode_seconds: float
    decoded: DecodedImage


def file_size(path: PathLike) -> Optional[int]:
    """Return the size of ``path`` in bytes, or None if it cannot be read."""
    try:
        return Path(path).stat().st_size
    except OSError as exc:
        print(f"Error opening file for size check: {exc}", file=sys.stderr)
        return None


def _original_channels(image: Image.Image) -> int:
    if image.mode == "P":
        return 4 if "transparency" in image.info else 3
    return len(image.getbands())


def _load_png(path: PathLike) -> tuple[int, int, int, bytes]:
    try:
        with Image.open(path) as image:
            image.load()
            channels = _original_channels(image)
            rgba = image.convert("RGBA")
            return rgba.width, rgba.height, channels, rgba.tobytes()
    except OSError as exc:
        raise QOIError(f"Error loading PNG '{path}': {exc}") from exc


def _print_statistics(stats: _BenchmarkStats) -> None:
    print("\n--- Benchmark Statistics ---")
    pixel_count = stats.width * stats.height
    print(f"Raw RGBA (uncompressed) size: {stats.raw_size} bytes")

    if stats.qoi_size:
        print(f"Output QOI size: {stats.qoi_size} bytes")
        print(
            "Compression ratio (Raw_RGBA_size / QOI_size): "
            f"{stats.raw_size / stats.qoi_size:.2f} : 1"
        )
        if stats.png_size:
            print(f"Input PNG size: {stats.png_size} bytes")
            print(
                "Compression ratio (PNG_size / QOI_size): "
                f"{stats.png_size / stats.qoi_size:.2f} : 1"
            )
        else:
            print("Could not get input PNG file size for PNG ratio calculation.")
        print(f"QOI Bits per pixel (Bpp): {stats.qoi_size * 8 / pixel_count:.2f}")
        print(f"Raw RGBA Bits per pixel (Bpp): {stats.raw_size * 8 / pixel_count:.2f}")
    else:
        print("Could not get QOI file size for ratio calculations.")
        if not stats.png_size:
            print("Could not get input PNG file size either.")

    if stats.encode_seconds > 0:
        print(f"Encoding speed: {pixel_count / stats.encode_seconds / 1e6:.2f} Megapixels/sec")
    if stats.decode_seconds > 0:
        print(f"Decoding speed: {pixel_count / stats.decode_seconds / 1e6:.2f} Megapixels/sec")


def run_benchmark(
    input_png: PathLike,
    output_qoi: PathLike,
    decoded_png: Optional[PathLike] = None,
) -> _BenchmarkStats:
    """Encode a PNG to QOI, decode it back and report sizes and speeds.

    Raises QOIError or OSError when loading, encoding or decoding fails.
    """
    width, height, channels, rgba = _load_png(input_png)
    print(
        f"Loaded PNG '{input_png}': {width} x {height}, "
        f"Original Channels: {channels} (loaded as RGBA)"
    )

    print(f"\nEncoding to QOI '{output_qoi}'...")
    header_channels = 3 if channels == 3 else 4
    with open(output_qoi, "wb") as stream:
        start = time.process_time()
        try:
            encode_to_file(rgba, width, height, header_channels, 0, stream)
        except QOIError:
            failed = True
        else:
            failed = False
        encode_seconds = time.process_time() - start
    if failed:
        os.remove(output_qoi)
        raise QOIError("QOI encoding failed.")
    print(f"Encoding successful. Time: {encode_seconds:.4f} seconds")

    print(f"\nDecoding from QOI '{output_qoi}'...")
    with open(output_qoi, "rb") as stream:
        start = time.process_time()
        try:
            decoded = decode_from_file(stream)
        except QOIError as exc:
            raise QOIError(f"QOI decoding failed: {exc}") from exc
        decode_seconds = time.process_time() - start
    print(f"Decoding successful. Time: {decode_seconds:.4f} seconds")
    print(
        f"Decoded QOI: {decoded.width} x {decoded.height}, "
        f"Channels in header: {decoded.channels}, "
        f"Colorspace in header: {decoded.colorspace}"
    )

    if (decoded.width, decoded.height) != (width, height):
        print(
            f"Error: Decoded dimensions ({decoded.width}x{decoded.height}) "
            f"do not match original ({width}x{height})!",
            file=sys.stderr,
        )
    else:
        print("Dimensions match original.")

    if decoded_png is not None:
        print(f"Saving decoded image to '{decoded_png}'...")
        try:
            raw = b"".join(bytes(pixel) for pixel in decoded.pixels)
            Image.frombytes("RGBA", (decoded.width, decoded.height), raw).save(
                decoded_png, format="PNG"
            )
        except (OSError, ValueError) as exc:
            print(f"Error writing decoded PNG to '{decoded_png}': {exc}", file=sys.stderr)
        else:
            print("Decoded image saved successfully.")

    stats = _BenchmarkStats(
        width=width,
        height=height,
        original_channels=channels,
        raw_size=width * height * 4,
        qoi_size=file_size(output_qoi),
        png_size=file_size(input_png),
        encode_seconds=encode_seconds,
        decode_seconds=decode_seconds,
        decoded=decoded,
    )
    _print_statistics(stats)
    print("\nBenchmark finished.")
    return stats


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the benchmark from command-line arguments; return the exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not 2 <= len(args) <= 3:
        print(_USAGE, file=sys.stderr)
        return 1
    input_png, output_qoi = args[0], args[1]
    decoded_png = args[2] if len(args) == 3 else None
    try:
        run_benchmark(input_png, output_qoi, decoded_png)
    except (QOIError, OSError) as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())