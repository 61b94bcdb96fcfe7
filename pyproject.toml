[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "helios"
version = "0.8.5"
description = "Core types and command-line argument handling for a multichain light client"
requires-python = ">=3.10"
dependencies = []
keywords = ["ethereum", "light-client", "opstack", "linea", "rpc", "block-tag"]
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
    "Topic :: Internet",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["helios"]

[tool.pytest.ini_options]
addopts = "-ra"
