[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "neomidi"
version = "0.1.0"
description = "MIDI tempo maps, port management, settings and piano-roll display helpers"
requires-python = ">=3.10"
dependencies = [
    "mido",
]
keywords = ["midi", "piano", "tempo", "synthesizer", "waterfall"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Sound/Audio :: MIDI",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["neomidi"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
