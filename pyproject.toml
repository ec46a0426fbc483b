[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rmfsched"
version = "0.1.0"
description = "Scheduling utilities: event conflict identification, time helpers, logging and notification clients"
requires-python = ">=3.10"
keywords = ["scheduling", "conflict detection", "notifications", "websocket", "http"]
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
    "Topic :: Office/Business :: Scheduling",
]
dependencies = [
    "requests",
    "websocket-client",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
rmfsched-notify-demo = "rmfsched.demo:main"

[tool.hatch.build.targets.wheel]
packages = ["rmfsched"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
