[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "orderlab"
version = "0.1.0"
description = "Order models, in-memory caches, shard routing, pipelines, logging, metrics and a small HTTP cache service"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "orders",
    "cache",
    "sharding",
    "murmur3",
    "pipeline",
    "ring-buffer",
    "concurrency",
    "metrics",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
orderlab-pipeline = "orderlab.pipeline:main"
orderlab-cache-server = "orderlab.cache_server:main"

[tool.hatch.build.targets.wheel]
packages = ["orderlab"]

[tool.hatch.build.targets.sdist]
include = ["orderlab", "tests"]

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
