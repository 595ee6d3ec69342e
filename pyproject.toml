[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "proclist"
version = "0.1.0"
description = "List running processes with their threads, memory use and CPU times"
requires-python = ">=3.10"
dependencies = [
    "psutil",
]
keywords = ["process", "ps", "threads", "memory", "monitoring", "cli"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Monitoring",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
proclist = "proclist.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["proclist"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
