[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rivecbench"
version = "0.1.0"
description = "Small scientific benchmark kernels: lavaMD, somier, matmul, pathfinder and a particle filter"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["benchmark", "kernels", "molecular-dynamics", "particle-filter", "stencil", "matmul"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Benchmark",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
rivecbench-lavamd = "rivecbench.lavamd_cli:main"
rivecbench-somier = "rivecbench.somier_cli:main"
rivecbench-matmul = "rivecbench.matmul:main"
rivecbench-pathfinder = "rivecbench.pathfinder:main"
rivecbench-particlefilter = "rivecbench.particlefilter:main"

[tool.hatch.build.targets.wheel]
packages = ["rivecbench"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
