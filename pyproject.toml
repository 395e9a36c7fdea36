[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "deathstar"
version = "0.1.0"
description = "A two-player terminal shooter: fly the trench run against the Empire or hunt the rebel pilot down."
requires-python = ">=3.10"
keywords = ["game", "terminal", "shooter", "two-player", "arcade"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Environment :: Console :: Curses",
    "Intended Audience :: End Users/Desktop",
    "Natural Language :: Korean",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Side-Scrolling/Arcade Games",
]
dependencies = [
    "blessed",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
deathstar = "deathstar.app:main"
deathstar-sound = "deathstar.sound:main"

[tool.hatch.build.targets.wheel]
packages = ["deathstar"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
