[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sysbro"
version = "1.0.0"
description = "System information, startup application and systemd service management helpers for Linux desktops"
requires-python = ">=3.10"
dependencies = []
keywords = ["linux", "autostart", "systemd", "desktop-entry", "system-info"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
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

[project.scripts]
sysbro-startup-apps = "sysbro.startup_cli:main"

[tool.hatch.build.targets.wheel]
packages = ["sysbro"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
