[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "plugbot"
version = "0.1.0"
description = "Building blocks for a group chat bot: per-group service switches, base16384, small talk, fortunes, lookups and a control panel"
requires-python = ">=3.10"
keywords = ["chatbot", "plugins", "base16384", "group chat", "fortune", "flask"]
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
    "Natural Language :: Chinese (Simplified)",
    "Framework :: Flask",
    "Topic :: Communications :: Chat",
]
dependencies = [
    "requests",
    "pillow",
    "psutil",
    "flask",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[tool.hatch.build.targets.wheel]
packages = ["plugbot"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
ignore_missing_imports = true
