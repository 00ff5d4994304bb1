[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pcapna"
version = "0.0.1"
description = "Decoders for Ethernet, BOOTP/DHCP and DNS packets, plus network interface listing"
requires-python = ">=3.10"
keywords = ["packet", "ethernet", "vlan", "dhcp", "bootp", "dns", "network", "decoder"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking :: Monitoring",
]
dependencies = [
    "psutil",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["pcapna"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
