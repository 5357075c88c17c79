[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "colima"
version = "0.1.0"
description = "Building blocks for running container runtimes inside Lima virtual machines"
requires-python = ">=3.10"
keywords = ["lima", "virtual-machine", "containers", "docker", "qemu", "ssh", "yaml"]
classifiers = [
    "Development Status :: 3 - Alpha",
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
dependencies = [
    "ruamel-yaml",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["colima"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
