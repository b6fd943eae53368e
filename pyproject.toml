[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "brillig"
version = "0.1.0"
description = "A register-based virtual machine for Brillig bytecode with built-in black box functions"
requires-python = ">=3.10"
keywords = ["brillig", "virtual machine", "bytecode", "interpreter", "field elements"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Interpreters",
]
dependencies = [
    "pycryptodome",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["brillig"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
