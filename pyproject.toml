[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "xvtools"
version = "0.1.0"
description = "Userland tools, a shell parser, a first-fit heap and an Sv39 page-table model of a small teaching Unix"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "unix",
    "teaching",
    "operating-system",
    "risc-v",
    "sv39",
    "page-table",
    "shell",
    "grep",
    "malloc",
    "elf",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Operating System",
    "Topic :: Education",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
xvt-grep = "xvtools.grep:main"
xvt-wc = "xvtools.wc:main"
xvt-cat = "xvtools.tools:cat_main"
xvt-echo = "xvtools.tools:echo_main"
xvt-ls = "xvtools.tools:ls_main"
xvt-mkdir = "xvtools.tools:mkdir_main"
xvt-rm = "xvtools.tools:rm_main"
xvt-ln = "xvtools.tools:ln_main"
xvt-kill = "xvtools.tools:kill_main"
xvt-helloworld = "xvtools.tools:helloworld_main"

[tool.hatch.build.targets.wheel]
packages = ["xvtools"]

[tool.hatch.build.targets.sdist]
include = ["xvtools", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
