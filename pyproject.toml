[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pressbrake-admin"
version = "0.1.0"
description = "Password-protected command-line editor for the press brake CSV databases"
requires-python = ">=3.10"
dependencies = []
keywords = ["csv", "press brake", "database", "editor", "admin", "backup"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Manufacturing",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database :: Front-Ends",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
pressbrake-admin = "pressbrake_admin.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["pressbrake_admin"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
