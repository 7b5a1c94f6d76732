[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "archidoc"
version = "0.3.0"
description = "Parse architecture annotations from Rust source trees into C4 module records, with pattern heuristics and fitness checks"
requires-python = ">=3.10"
keywords = ["c4-model", "architecture", "documentation", "rust", "parser"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Documentation",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["archidoc"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
