[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "voltdsp"
version = "0.1.0"
description = "Sample-by-sample audio building blocks: filters, envelopes, effects, dynamics and drum voices"
requires-python = ">=3.10"
dependencies = []
keywords = ["dsp", "audio", "synthesis", "filter", "envelope", "compressor", "drums"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: Sound Synthesis",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["voltdsp"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"
