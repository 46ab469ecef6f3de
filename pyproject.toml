[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "steerdungeon"
version = "0.1.0"
description = "Steering behaviours, procedural dungeon generation and portal-based pathfinding for a small top-down game simulation"
requires-python = ">=3.10"
dependencies = []
keywords = ["steering", "boids", "dungeon", "procedural-generation", "pathfinding", "a-star", "cellular-automata", "roguelike"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment :: Simulation",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
steerdungeon = "steerdungeon.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["steerdungeon"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
