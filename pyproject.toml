[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "prettyprogress"
version = "0.1.0"
description = "Render one or more progress trackers on the terminal with styles, ETA, speed and an overall tracker."
requires-python = ">=3.10"
keywords = ["progress", "progress-bar", "terminal", "tracker", "eta"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Terminals",
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = [
    "wcwidth",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["prettyprogress"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
