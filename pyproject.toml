[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "audiobench"
version = "0.1.0"
description = "Audio processing test bench: meters, FFT and oscilloscope frames, noise and test-signal generators, and a timing harness for processors"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["audio", "dsp", "metering", "fft", "oscillator", "noise", "polyblep", "benchmark"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Sound/Audio :: Analysis",
    "Topic :: Multimedia :: Sound/Audio :: Sound Synthesis",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["audiobench"]

[tool.pytest.ini_options]
addopts = "-ra"
