[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "orbc"
version = "0.1.0"
description = "Front-end building blocks of the Orb language compiler: type table, symbol table, reserved names, string pool, literal unescaping and argument parsing."
requires-python = ">=3.10"
dependencies = []
keywords = ["compiler", "orb", "type-system", "symbol-table", "language"]
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
    "Topic :: Software Development :: Compilers",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["orbc"]

[tool.hatch.build.targets.sdist]
include = ["orbc", "tests", "pyproject.toml", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
