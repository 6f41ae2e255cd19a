[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "synthkit"
version = "0.1.0"
description = "Models for synthesizer controls: parameter ramps, a piano keyboard, parameter widgets, a status bar and colour palettes."
requires-python = ">=3.10"
dependencies = []
keywords = ["synthesizer", "audio", "midi", "keyboard", "ramp", "palette"]
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
    "Topic :: Multimedia :: Sound/Audio :: Sound Synthesis",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.setuptools.packages.find]
include = ["synthkit*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
