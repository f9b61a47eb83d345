[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "imgeraser"
version = "1.1.0b0"
description = "Resource types, scheme registry and configuration defaults for a cluster image-cleanup controller"
requires-python = ">=3.10"
dependencies = []
keywords = ["kubernetes", "images", "cleanup", "configuration", "crd"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["imgeraser"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
