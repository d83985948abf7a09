[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "panelctl"
version = "0.1.0"
description = "Control an AM03127 LED message panel over a serial line, with stored pages and schedules and an HTTP API"
requires-python = ">=3.10"
keywords = ["am03127", "led", "panel", "serial", "display", "http"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Home Automation",
]
dependencies = [
    "pyserial>=3.5",
    "flask>=2.2",
]

[project.optional-dependencies]
test = [
    "pytest>=7",
]

[project.scripts]
panelctl = "panelctl.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["panelctl"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
