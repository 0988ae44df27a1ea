[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gale"
version = "0.1.0"
description = "A small HTTP load generator that hammers a server over keep-alive connections and reports latency statistics."
requires-python = ">=3.10"
dependencies = [
    "rich",
]
keywords = ["http", "benchmark", "load-testing", "latency", "traffic-generation"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Testing :: Traffic Generation",
    "Topic :: System :: Benchmark",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
gale = "gale.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["gale"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
