[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sc2botkit"
version = "0.1.0"
description = "Toolkit for writing StarCraft II bots: geometry, image grids, unit queries and a protocol definition upgrader."
requires-python = ">=3.10"
dependencies = []
keywords = ["starcraft", "sc2", "bot", "rts", "game-ai", "protobuf"]
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
    "Topic :: Games/Entertainment :: Real Time Strategy",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Topic :: Software Development :: Code Generators",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
sc2botkit-protogen = "sc2botkit.protogen:main"

[tool.hatch.build.targets.wheel]
packages = ["sc2botkit"]

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
