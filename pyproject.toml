[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "flipgraph"
version = "0.1.0"
description = "Search for low-rank matrix multiplication schemes over Z2 by random walks on the flip graph"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "matrix multiplication",
    "flip graph",
    "tensor rank",
    "bilinear algorithms",
    "search",
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
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.setuptools.packages.find]
include = ["flipgraph*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
