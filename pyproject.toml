[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tctools"
version = "1.0.0"
description = "Small desktop utilities for a lightweight Linux system: backup lists, mounts, network, mouse, launchers, dialogs and tray configuration helpers"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "backup",
    "mount",
    "network",
    "mouse",
    "launcher",
    "alsa",
    "tkinter",
    "desktop",
]
classifiers = [
    "Development Status :: 5 - Production/Stable",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration",
    "Topic :: Desktop Environment",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
filetool = "tctools.filetool:main"
flrun = "tctools.flrun:main"
mnttool = "tctools.mnttool:main"
mousetool = "tctools.mousetool:main"
network = "tctools.network:main"
popup = "tctools.dialogs:popup_main"
popask = "tctools.dialogs:popask_main"
flpdf = "tctools.dialogs:flpdf_main"
loadpack = "tctools.dialogs:loadpack_main"

[tool.hatch.build.targets.wheel]
packages = ["tctools"]

[tool.hatch.build.targets.sdist]
include = ["tctools", "tests", "pyproject.toml", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
