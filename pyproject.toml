[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "paxi"
version = "0.1.0"
description = "Identifiers, ballots, data structures, message types and an HTTP client for replicated key-value stores"
requires-python = ">=3.10"
keywords = [
    "paxos",
    "consensus",
    "replication",
    "distributed-systems",
    "key-value",
    "hash-ring",
    "graph",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Distributed Computing",
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = [
    "requests",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[project.scripts]
paxi = "paxi.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["paxi"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
