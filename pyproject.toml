[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "quotekeeper"
version = "0.1.0"
description = "A small HTTP server for storing, tagging and searching quotes, backed by SQLite."
requires-python = ">=3.10"
keywords = ["quotes", "rest", "api", "sqlite", "fastapi", "server"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Web Environment",
    "Framework :: FastAPI",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]
dependencies = [
    "fastapi",
    "uvicorn",
    "pydantic",
]

[project.optional-dependencies]
test = [
    "pytest",
    "httpx",
]

[project.scripts]
quotekeeper = "quotekeeper.app:main"

[tool.hatch.build.targets.wheel]
packages = ["quotekeeper"]

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
