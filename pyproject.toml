[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "parlab"
version = "0.1.0"
description = "PageRank and triangle counting over CSR/CSC graphs, edge-balanced partitioning, a small option parser and a queue throughput benchmark"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "pagerank",
    "triangle-counting",
    "graph",
    "csr",
    "partitioning",
    "benchmark",
    "queue",
    "barrier",
    "command-line",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
    "Topic :: System :: Benchmark",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
parlab-pagerank = "parlab.pagerank:main"
parlab-triangles = "parlab.triangles:main"
parlab-throughput = "parlab.throughput:main"

[tool.hatch.build.targets.wheel]
packages = ["parlab"]

[tool.hatch.build.targets.sdist]
include = ["parlab", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
