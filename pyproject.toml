[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "evmcore"
version = "0.1.0"
description = "Ethereum virtual machine primitives and precompiled contracts"
requires-python = ">=3.10"
dependencies = [
    "pycryptodome",
]
keywords = ["ethereum", "evm", "precompile", "keccak", "alt_bn128", "blake2"]
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
    "Topic :: Software Development :: Interpreters",
    "Topic :: Security :: Cryptography",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["evmcore"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
