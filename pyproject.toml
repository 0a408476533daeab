[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "limatools"
version = "0.1.0"
description = "Host-side helpers for Linux virtual machine instances: instance directories, SSH option formatting, OpenSSH detection, macOS network settings and QEMU signing checks"
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
    "semver",
]
keywords = ["virtual-machine", "qemu", "ssh", "instances", "proxy", "codesign"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: MacOS",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Emulators",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["limatools"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
