[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "iochat"
version = "0.1.0"
description = "A small TCP broadcast chat server and line-based chat client"
requires-python = ">=3.10"
dependencies = []
keywords = ["chat", "tcp", "asyncio", "broadcast", "server", "client"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: AsyncIO",
    "Topic :: Communications :: Chat",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
iochat-server = "iochat.server:main"
iochat-client = "iochat.client:main"

[tool.hatch.build.targets.wheel]
packages = ["iochat"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
