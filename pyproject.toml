[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "qoicodec"
version = "0.1.0"
description = "Encoder and decoder for the QOI (Quite OK Image) format, with a PNG round-trip benchmark."
requires-python = ">=3.10"
keywords = ["qoi", "image", "codec", "compression", "png", "benchmark"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
]
dependencies = [
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
qoicodec-benchmark = "qoicodec.benchmark:main"

[tool.hatch.build.targets.wheel]
packages = ["qoicodec"]

[tool.pytest.ini_options]
addopts = "-ra"
