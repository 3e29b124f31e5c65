[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "irepl"
version = "0.1.0"
description = "Incremental Rust evaluation through a scratch cargo project, with line-editor pieces and hook scripts"
requires-python = ">=3.10"
dependencies = [
    "platformdirs",
    "toml",
]
keywords = ["repl", "rust", "cargo", "interpreter", "terminal"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Interpreters",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
irepl = "irepl.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["irepl"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
