[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hexbuf"
version = "1.0.0"
description = "Byte buffers and a bounds-checked binary stream reader for building and parsing binary data"
requires-python = ">=3.10"
dependencies = []
keywords = ["binary", "buffer", "bytes", "stream", "parsing", "deserialisation"]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["hexbuf"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
