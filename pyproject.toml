[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cyclicexec"
version = "0.1.0"
description = "A clock-driven cyclic executive for periodic tasks, with real-time priority and CPU affinity helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["real-time", "scheduling", "cyclic executive", "clock-driven", "frames", "periodic tasks"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Embedded Systems",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
cyclicexec = "cyclicexec.applications:main"

[tool.hatch.build.targets.wheel]
packages = ["cyclicexec"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
