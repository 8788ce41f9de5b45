[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "heatfin"
version = "0.1.0"
description = "Finite-difference simulation of heat transfer in a single CPU radiator fin"
requires-python = ">=3.10"
dependencies = []
keywords = ["heat equation", "finite differences", "tridiagonal", "simulation", "radiator"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.setuptools.packages.find]
include = ["heatfin*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
