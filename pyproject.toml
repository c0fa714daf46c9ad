[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rbsched"
version = "0.1.0"
description = "Process scheduler simulation built on a 2-3-4 tree with a red-black view"
requires-python = ">=3.10"
dependencies = []
keywords = ["scheduler", "2-3-4 tree", "red-black tree", "simulation", "processes"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Operating System",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["rbsched"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
