"""QOI image encoding and decoding, with a PNG round-trip benchmark command."""

__version__ = "0.1.0"
__all__ = ["format", "encoder", "decoder", "benchmark"]