[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pompkit"
version = "0.1.0"
description = "Numerical building blocks for partially observed Markov process models: B-splines, covariate tables, probes, particle-filter bookkeeping and model-component evaluation."
requires-python = ">=3.10"
keywords = [
    "pomp",
    "state-space models",
    "particle filter",
    "b-spline",
    "time series",
    "statistical inference",
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
dependencies = [
    "numpy",
    "scipy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["pompkit"]

[tool.pytest.ini_options]
addopts = "-ra"
