[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "quickprice"
version = "1.0.0"
description = "Black-Scholes pricing of European options with Greeks, implied volatility, timing, pooling and thread-pool utilities"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "options",
    "black-scholes",
    "greeks",
    "implied-volatility",
    "pricing",
    "latency",
    "thread-pool",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Financial and Insurance Industry",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial :: Investment",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
quickprice-demo = "quickprice.demo:main"

[tool.hatch.build.targets.wheel]
packages = ["quickprice"]

[tool.pytest.ini_options]
addopts = "-ra"
