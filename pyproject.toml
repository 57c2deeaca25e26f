[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fynetools"
version = "0.1.0"
description = "Helpers for preparing desktop and mobile application builds: shell commands, file utilities and Android/iOS cross-compilation environments."
requires-python = ">=3.10"
dependencies = []
keywords = ["build", "android", "ios", "ndk", "toolchain", "cross-compilation"]
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
    "Topic :: Software Development :: Build Tools",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["fynetools"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
