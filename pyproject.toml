[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "posespline"
version = "0.1.0"
description = "Cumulative B-spline helpers for JPL quaternions and poses, with timing, integration and error-term utilities"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "b-spline",
    "quaternion",
    "jpl",
    "pose",
    "lie-group",
    "continuous-time",
    "state-estimation",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = [
    "pytest",
    "numpy",
]

[tool.hatch.build.targets.wheel]
packages = ["posespline"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
