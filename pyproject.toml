[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sam2695"
version = "0.1.0"
description = "Drive a SAM2695 MIDI synthesizer: MIDI messages, debounced buttons, chord tracks and a mode state machine"
requires-python = ">=3.10"
dependencies = []
keywords = ["midi", "synthesizer", "sam2695", "state-machine", "music", "general-midi"]
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
    "Topic :: Multimedia :: Sound/Audio :: MIDI",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["sam2695"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
