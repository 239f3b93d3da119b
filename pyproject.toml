[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "oatcore"
version = "0.1.0"
description = "Core building blocks for a telescope tracking mount: time and latitude values, persistent settings, build configuration, level sensing and an LCD menu."
requires-python = ">=3.10"
dependencies = []
keywords = ["astronomy", "telescope", "mount", "tracker", "right-ascension", "latitude", "eeprom", "mpu6050", "lcd"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Astronomy",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["oatcore"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
