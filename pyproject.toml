[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "remoteshell"
version = "0.1.0"
description = "A minimal TCP remote shell: run commands on a server or locally from one prompt"
requires-python = ">=3.10"
keywords = ["shell", "tcp", "remote", "terminal", "socket"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Shells",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
remoteshell-server = "remoteshell.server:main"
remoteshell-client = "remoteshell.client:main"

[tool.hatch.build.targets.wheel]
packages = ["remoteshell"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
