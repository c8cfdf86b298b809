[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "netclocksync"
version = "0.1.0"
description = "Peer-to-peer UDP node that joins a network of peers and speaks a binary clock synchronization message format"
requires-python = ">=3.10"
dependencies = []
keywords = ["udp", "peer-to-peer", "clock", "time synchronization", "networking"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking :: Time Synchronization",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
netclocksync = "netclocksync.node:main"

[tool.hatch.build.targets.wheel]
packages = ["netclocksync"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
