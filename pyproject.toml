[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "akoconf"
version = "0.1.0"
description = "Parser and serializer for the Ako configuration language"
requires-python = ">=3.10"
dependencies = []
keywords = ["ako", "config", "configuration", "parser", "serializer"]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Topic :: Text Processing",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
akocli = "akoconf.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["akoconf"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
