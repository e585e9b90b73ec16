[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lobbyarena"
version = "0.1.0"
description = "WebSocket lobby and game-state relay server for small multiplayer browser games"
requires-python = ">=3.10"
dependencies = [
    "aiohttp",
]
keywords = ["websocket", "lobby", "multiplayer", "game", "server", "aiohttp"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Framework :: AsyncIO",
    "Framework :: aiohttp",
    "Intended Audience :: Developers",
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
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
lobbyarena = "lobbyarena.server:main"

[tool.hatch.build.targets.wheel]
packages = ["lobbyarena"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
