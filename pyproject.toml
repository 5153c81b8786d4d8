[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "wavecraft"
version = "0.20.1"
description = "Composable audio sample sources: signal generators, noise, and stream controls such as pause, speed, trim and repeat."
requires-python = ">=3.10"
dependencies = []
keywords = ["audio", "dsp", "signal-generator", "noise", "wav", "samples"]
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
    "Topic :: Multimedia :: Sound/Audio",
    "Topic :: Multimedia :: Sound/Audio :: Sound Synthesis",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["wavecraft"]

[tool.hatch.build.targets.sdist]
include = ["wavecraft", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
