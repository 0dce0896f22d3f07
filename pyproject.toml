[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ebbtrack"
version = "0.1.0"
description = "Time-tracking reports, working-hour balance, holidays, sick days and vacations from plain TOML files"
requires-python = ">=3.11"
keywords = ["time-tracking", "timesheet", "working-hours", "vacation", "cli"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Scheduling",
    "Topic :: Utilities",
]
dependencies = [
    "tomli-w",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
ebbtrack = "ebbtrack.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["ebbtrack"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
