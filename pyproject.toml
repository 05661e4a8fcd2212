[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kcoretouch"
version = "0.1.0"
description = "Touch-surface calibration, TUIO encoding and renderer-free GUI controls for camera-based multitouch tracking"
requires-python = ">=3.10"
dependencies = []
keywords = ["multitouch", "tuio", "osc", "calibration", "blob-tracking", "gui"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Human Machine Interfaces",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["kcoretouch"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
