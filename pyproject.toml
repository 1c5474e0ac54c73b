[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "blockclock"
version = "0.1.0"
description = "Screen layouts for a multi-panel Bitcoin ticker display, with a pure-Python QR Code encoder"
requires-python = ">=3.10"
dependencies = []
keywords = ["bitcoin", "ticker", "e-paper", "display", "qr-code", "halving", "lightning"]
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
    "Topic :: Office/Business :: Financial",
    "Topic :: Multimedia :: Graphics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["blockclock"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
