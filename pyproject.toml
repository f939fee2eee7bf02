[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nonlinsig"
version = "0.1.0"
description = "Chaotic attractor signal generators and recurrence-based nonlinear signal analysis (RPDE, RQA)"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "chaos",
    "attractor",
    "lorenz",
    "thomas",
    "dadras",
    "recurrence",
    "rqa",
    "rpde",
    "audio",
    "nonlinear dynamics",
]
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
    "Topic :: Multimedia :: Sound/Audio :: Analysis",
    "Topic :: Multimedia :: Sound/Audio :: Sound Synthesis",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["nonlinsig"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
