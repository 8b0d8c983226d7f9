[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sioj"
version = "0.1.0"
description = "JSON values with binary support, typed JSON objects, key-name trimming and simple JSON-over-HTTP requests"
requires-python = ">=3.10"
dependencies = []
keywords = ["json", "http", "binary", "base64", "rest", "websocket"]
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
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["sioj"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
