[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "probekit"
version = "0.1.0"
description = "Health probes for host metrics, HTTP endpoints and MySQL, Redis, Memcache and MongoDB servers"
requires-python = ">=3.10"
keywords = [
    "monitoring",
    "health-check",
    "probe",
    "http",
    "mysql",
    "redis",
    "memcache",
    "mongodb",
    "host-metrics",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Monitoring",
    "Topic :: System :: Networking :: Monitoring",
]
dependencies = [
    "pymysql",
    "redis",
    "pymongo",
    "requests",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["probekit"]

[tool.hatch.build.targets.sdist]
include = [
    "probekit",
    "tests",
]

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
