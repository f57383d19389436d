[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "iavlproof"
version = "0.1.0"
description = "Merkle proof primitives for IAVL trees: proof nodes, ICS-23 style operations and merged iteration over saved and unsaved state"
requires-python = ">=3.10"
dependencies = []
keywords = ["iavl", "merkle", "proof", "ics23", "avl", "sha256"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries",
    "Topic :: Security :: Cryptography",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["iavlproof"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
