[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cps"
version = "0.1.0"
description = "Read a 1-Wire temperature sensor through a pigpio daemon, show it on a shift-register segment display and log it to SQLite"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "raspberry-pi",
    "pigpio",
    "gpio",
    "shift-register",
    "seven-segment",
    "temperature",
    "sqlite",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Hardware",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
cps = "cps.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["cps"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
