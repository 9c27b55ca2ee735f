[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "llminfer"
version = "0.1.0"
description = "Typed tensors, byte buffers, host memory managers and status values for a small LLM inference core"
requires-python = ">=3.10"
dependencies = ["numpy"]
keywords = ["tensor", "inference", "llm", "buffer", "memory"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["llminfer"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
