[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "xv6utils"
version = "0.1.0"
description = "A minimal Unix-style shell, small text and file tools, and helpers for the binary structures of a tiny RISC-V operating system"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "shell",
    "grep",
    "wc",
    "ls",
    "cat",
    "elf",
    "virtio",
    "malloc",
    "printf",
    "risc-v",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Shells",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
xv6-sh = "xv6utils.sh:main"
xv6-grep = "xv6utils.grep:main"
xv6-wc = "xv6utils.wc:main"
xv6-ls = "xv6utils.ls:main"
xv6-cat = "xv6utils.coreutils:cat_main"
xv6-echo = "xv6utils.coreutils:echo_main"
xv6-kill = "xv6utils.coreutils:kill_main"
xv6-ln = "xv6utils.coreutils:ln_main"
xv6-mkdir = "xv6utils.coreutils:mkdir_main"
xv6-rm = "xv6utils.coreutils:rm_main"

[tool.hatch.build.targets.wheel]
packages = ["xv6utils"]

[tool.hatch.build.targets.sdist]
include = ["xv6utils", "tests", "README.md"]

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
