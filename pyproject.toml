[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mailsieve"
version = "3.24.0"
description = "Mail filtering building blocks: an egrep-style matcher, rcfile variables, program pipes and header field names"
requires-python = ">=3.10"
dependencies = []
keywords = ["mail", "filter", "mda", "regexp", "rcfile"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Email :: Filters",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
mailsieve-recommend = "mailsieve.recommend:main"
mailsieve-setid = "mailsieve.setid:main"

[tool.hatch.build.targets.wheel]
packages = ["mailsieve"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"
