[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nvgd"
version = "0.1.0"
description = "Composable line and text filters for browsing logs and data files: head, tail, grep, cut, count, pager, hash, JSON array and Markdown rendering."
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
    "markdown",
]
keywords = [
    "filter",
    "logs",
    "grep",
    "tail",
    "head",
    "cut",
    "pager",
    "markdown",
    "text-processing",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Processing :: Filters",
    "Topic :: System :: Logging",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["nvgd"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
