[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pmdump"
version = "0.1.0"
description = "Read users, folder trees and document versions from a document management system database for export"
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
]
keywords = ["export", "sqlite", "documents", "migration", "database"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
pmdump = "pmdump.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["pmdump"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
