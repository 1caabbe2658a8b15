[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "arpgkit"
version = "0.1.0"
description = "Engine-independent building blocks for a 2D action RPG: Tiled map loading, sprite and debug-shape batching, timers, input events and menu/textbox UI logic."
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "rpg", "tiled", "tmx", "sprites", "batching", "2d"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment :: Role-Playing",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["arpgkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
