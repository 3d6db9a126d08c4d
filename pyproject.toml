[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "exposkit"
version = "0.1.0"
description = "Compiler building blocks for the ExpL and SPL languages targeting the XSM machine"
requires-python = ">=3.10"
dependencies = []
keywords = ["compiler", "code-generation", "xsm", "expl", "spl", "assembly", "symbol-table"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Compilers",
    "Topic :: Software Development :: Assemblers",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["exposkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
