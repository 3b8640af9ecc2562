[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tricolor"
version = "0.1.0"
description = "Lower bounds for weighted 3-colouring of geometric graphs by packing small cliques"
requires-python = ">=3.10"
dependencies = []
keywords = ["graph", "coloring", "simulated-annealing", "cliques", "heuristics", "lower-bound"]
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

[project.scripts]
tricolor-lower-annealing = "tricolor.lower_annealing:main"

[tool.hatch.build.targets.wheel]
packages = ["tricolor"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
