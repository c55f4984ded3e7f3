[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "thehunter"
version = "1.0.0"
description = "A small 3D arcade hunting game: shoot the prey before it escapes the forest."
requires-python = ">=3.10"
keywords = ["game", "arcade", "pygame", "3d", "hunting", "bmp"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Arcade",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
thehunter = "thehunter.app:main"

[tool.hatch.build.targets.wheel]
packages = ["thehunter"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
