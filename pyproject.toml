[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "atcmd"
version = "0.1.0"
description = "Parsing of AT command responses, URCs and prompts for modems and serial devices"
requires-python = ">=3.10"
dependencies = []
keywords = ["at", "at-commands", "modem", "gsm", "serial", "urc", "parser"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["atcmd"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
