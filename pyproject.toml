[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "spaceraid"
version = "0.1.2"
description = "A small top-down space shooter: dodge enemy lasers and shoot down formations of invaders."
requires-python = ">=3.10"
dependencies = [
    "pygame",
]
keywords = ["game", "arcade", "shooter", "space", "invaders", "pygame"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Arcade",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
spaceraid = "spaceraid.app:main"

[tool.hatch.build.targets.wheel]
packages = ["spaceraid"]

[tool.pytest.ini_options]
addopts = "-ra"
