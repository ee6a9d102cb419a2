[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "glennmania"
version = "0.1.0"
description = "A networked side-scrolling platformer with a ZeroMQ game server and a pygame client"
requires-python = ">=3.10"
keywords = ["game", "platformer", "side-scroller", "multiplayer", "zeromq", "pygame"]
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
    "Topic :: Games/Entertainment :: Side-Scrolling/Arcade Games",
]
dependencies = [
    "pyzmq",
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
glennmania-server = "glennmania.server:main"
glennmania-client = "glennmania.client:main"

[tool.hatch.build.targets.wheel]
packages = ["glennmania"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
