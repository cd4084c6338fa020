[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "blowcrypt"
version = "1.0.0"
description = "Pure-Python bcrypt password hashing with crypt(3)-style interfaces and salt generation"
requires-python = ">=3.10"
dependencies = []
keywords = ["bcrypt", "blowfish", "password", "hashing", "crypt", "salt"]
classifiers = [
    "Development Status :: 5 - Production/Stable",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["blowcrypt"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
