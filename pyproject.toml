[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "spanreport"
version = "0.1.0"
description = "Source spans, labeled spans and context-aware span reading for rich diagnostic reports."
requires-python = ">=3.10"
dependencies = []
keywords = ["diagnostics", "errors", "source-span", "error-reporting", "compiler"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["spanreport"]

[tool.pytest.ini_options]
addopts = "-ra"
