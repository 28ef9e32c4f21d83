[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "xnetframe"
version = "0.1.0"
description = "Building blocks for network servers: sectioned properties with an INI file loader, queued logging to viewers with filters, MD5 digests, message handler registries and IPv4 address helpers."
requires-python = ">=3.10"
dependencies = []
keywords = ["network", "framework", "logging", "properties", "ini", "md5", "server"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Application Frameworks",
    "Topic :: System :: Logging",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["xnetframe"]

[tool.pytest.ini_options]
addopts = "-ra"
