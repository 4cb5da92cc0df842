"""Small scientific benchmark kernels (lavaMD, somier, matmul, pathfinder, particle filter) with command-line drivers."""

__version__ = "0.1.0"