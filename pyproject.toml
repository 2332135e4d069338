[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "midivideo"
version = "0.1.0"
description = "Play a video live and jump between cue frames from MIDI notes and keyboard keys"
requires-python = ">=3.10"
keywords = ["midi", "video", "vj", "live", "cue", "performance"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Video :: Display",
    "Topic :: Multimedia :: Sound/Audio :: MIDI",
]
dependencies = [
    "pygame",
    "mido",
    "imageio",
    "numpy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
midivideo = "midivideo.app:main"

[tool.hatch.build.targets.wheel]
packages = ["midivideo"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
