[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "netgateway"
version = "0.1.0"
description = "Discover the default network gateway and the local interface address that reaches it"
requires-python = ">=3.10"
dependencies = [
    "psutil",
]
keywords = ["gateway", "routing", "network", "netstat", "route table"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Operating System :: POSIX :: BSD",
    "Operating System :: POSIX :: SunOS/Solaris",
    "Operating System :: MacOS",
    "Operating System :: Microsoft :: Windows",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
netgateway = "netgateway.discovery:main"

[tool.hatch.build.targets.wheel]
packages = ["netgateway"]

[tool.pytest.ini_options]
addopts = "-ra"
