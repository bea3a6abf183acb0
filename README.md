# qoicodec

An encoder and decoder for the QOI ("Quite OK Image") format, written in
Python. It also includes a small benchmark command. The command takes a PNG,
encodes it to QOI, decodes it again and reports sizes, compression ratios and
speeds.

## Installation

```
pip install .
```

To install the test dependencies as well:

```
pip install .[test]
```

## Modules

- `qoicodec.format`: the shared pieces. It holds the `Pixel` named tuple
  `(r, g, b, a)`, where `a` defaults to 255. It holds the `Tag` enum of
  two-bit chunk tags and the `QOIError` exception. It holds
  `pixel_hash(pixel)`, which gives the slot of a pixel in the 64-entry index.
  It also holds the format constants (`MAGIC`, `END_MARKER`, `INDEX_SIZE`,
  `MAX_RUN_LENGTH` and so on).
- `qoicodec.encoder`: provides `encode` and `encode_to_file`.
- `qoicodec.decoder`: provides `decode`, `decode_from_file`, the
  `DecodedImage` dataclass and the `QOIDecodeError` exception.
- `qoicodec.benchmark`: provides `run_benchmark`, `file_size` and `main`.

## Encoding

```python
from qoicodec.format import Pixel
from qoicodec.encoder import encode, encode_to_file

pixels = [Pixel(255, 0, 0), Pixel(255, 0, 0), Pixel(0, 0, 255)]
data = encode(pixels, 3, 1, 4, 0)   # width, height, channels, colorspace

with open("out.qoi", "wb") as stream:
    written = encode_to_file(pixels, 3, 1, 4, 0, stream)
```

`pixels` can be either of two things:

- raw RGBA bytes, four bytes per pixel;
- an iterable of 4-component pixels, in row order.

The encoder uses only the first `width * height` pixels. `encode` returns the
whole QOI stream as `bytes`. `encode_to_file` writes it to a binary stream and
returns the number of bytes written.

`channels` and `colorspace` are written into the header as given; each must
fit in one byte. Every pixel is encoded with all four RGBA components,
whatever `channels` says.

`QOIError` is raised in these cases:

- the width or height is not positive;
- `width * height` exceeds 2^32 - 1;
- there are too few pixels;
- a pixel component lies outside 0–255.

## Decoding

```python
from qoicodec.decoder import decode, decode_from_file

image = decode(data)
print(image.width, image.height, image.channels, image.colorspace)
assert image.pixels == pixels

with open("out.qoi", "rb") as stream:
    image = decode_from_file(stream)
```

`DecodedImage.pixels` is a list of RGBA `Pixel` values in row order.

`QOIDecodeError` is a subclass of `QOIError`. It is raised in these cases:

- the header is short or the magic bytes are wrong;
- the width or height is zero, or the channels value is not 3 or 4;
- the pixel count is too large;
- the data ends before all pixels are decoded;
- a run would produce more pixels than the header declares.

Some problems do not stop decoding. In each of these cases the decoder emits a
`UserWarning` through the `warnings` module and still returns the image:

- the end-of-stream marker is missing or truncated;
- the marker does not match;
- more data follows the marker.

## Benchmark

```
qoicodec-benchmark input.png output.qoi [decoded.png]
```

The same can be run with `python -m qoicodec.benchmark`. It works in these
steps:

1. It loads `input.png` as RGBA, using Pillow.
2. It writes `output.qoi` with colorspace 0. The header records 3 channels
   when the source image had 3, and 4 otherwise.
3. It decodes `output.qoi` again and checks that the dimensions match. If you
   gave a third path, it saves the decoded image there as a PNG.
4. It prints the raw RGBA, PNG and QOI sizes, the compression ratios, the bits
   per pixel, and the encoding and decoding speeds. The speeds are measured in
   CPU time.

Exit status and output:

- The command exits with status 0 on success.
- It exits with status 1 on wrong arguments or on a load, encode or decode
  failure. In that case it prints a message to standard error.

Failure details:

- If encoding fails, the partly written QOI file is removed.
- A failure to save the decoded PNG is reported, but does not change the exit
  status.

From Python, `run_benchmark(input_png, output_qoi, decoded_png=None)` does the
same steps and returns the collected statistics.

## What it does not do

- There is no command for plain conversion between PNG and QOI. The only
  command is the benchmark.
- The benchmark reads its input through Pillow in any format Pillow opens. The
  decoded copy is always saved as PNG.
- Images with three channels are still encoded and decoded as RGBA pixels.