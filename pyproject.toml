[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "verletkit"
version = "0.1.0"
description = "Verlet particle physics with springs and collisions, a polling update thread, and STL model reading and writing"
requires-python = ">=3.10"
dependencies = []
keywords = ["physics", "verlet", "particles", "springs", "constraints", "stl", "mesh", "3d"]
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
    "Topic :: Scientific/Engineering :: Physics",
    "Topic :: Multimedia :: Graphics :: 3D Modeling",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["verletkit"]

[tool.pytest.ini_options]
addopts = "-ra"
