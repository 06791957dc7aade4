[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "larsupera"
version = "0.1.0"
description = "Monte Carlo truth bookkeeping for liquid-argon TPC simulation: particle trees, energy filters and track-id lookup tables"
requires-python = ">=3.10"
dependencies = []
keywords = ["physics", "liquid argon", "TPC", "Monte Carlo", "particle tree", "neutrino"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["larsupera"]

[tool.pytest.ini_options]
addopts = "-ra"
