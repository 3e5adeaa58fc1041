[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "osentropy"
version = "0.2.12"
description = "Fill buffers with random bytes from the operating system's random number generator."
requires-python = ">=3.10"
dependencies = []
keywords = ["random", "entropy", "getrandom", "csprng", "urandom", "security"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: POSIX :: Linux",
    "Operating System :: MacOS",
    "Operating System :: Microsoft :: Windows",
    "Operating System :: POSIX :: BSD",
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
packages = ["osentropy"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
