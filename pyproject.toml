[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bossraid"
version = "0.1.0"
description = "Cooperative boss raid game engine with rooms, characters, items and a small JSON CRDT document model"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "boss-raid", "rpg", "crdt", "multiplayer"]
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
    "Topic :: Games/Entertainment :: Role-Playing",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["bossraid"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
