[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "casimirsim"
version = "0.1.0"
description = "Data model, input readers, neighbour lists and particle placement for simulations of patchy colloids"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "colloids",
    "critical casimir",
    "patchy particles",
    "molecular simulation",
    "neighbor list",
    "periodic boundary conditions",
]
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
packages = ["casimirsim"]

[tool.pytest.ini_options]
addopts = "-ra"
