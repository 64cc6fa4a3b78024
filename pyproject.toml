[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "selfcord-core"
version = "0.2.0"
description = "Core building blocks for a chat client: user-settings protobuf encoding and a typed shared-state map"
requires-python = ">=3.10"
dependencies = []
keywords = ["chat", "protobuf", "settings", "status", "typemap"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Chat",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["selfcord_core"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
