[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "citychain"
version = "0.1.0"
description = "A two-player networked city chain game with a matchmaking TCP server and a terminal client"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "word game", "cities", "matchmaking", "tcp", "multiplayer"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
citychain-server = "citychain.game:main"
citychain-client = "citychain.client:main"

[tool.hatch.build.targets.wheel]
packages = ["citychain"]

[tool.pytest.ini_options]
addopts = "-ra"
