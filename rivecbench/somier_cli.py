"""Command line driver and reporting helpers for the spring-mass lattice simulation."""

from __future__ import annotations

import re
import sys
import time
from dataclasses import dataclass
from itertools import product
from typing import Callable, Optional, Sequence

import numpy as np

from rivecbench.somier import (
    DT,
    MASS,
    SPRING_K,
    acceleration,
    compute_forces,
    compute_forces_rowwise,
    compute_stats,
    init_positions,
    positions,
    velocities,
    zeros,
)

DEFAULT_STEPS = 5
DEFAULT_SIZE = 10
INITIAL_SPEED = 0.1

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass
class SimulationResult:
    """Final state of a simulation run."""

    X: np.ndarray
    V: np.ndarray
    center: tuple[float, float, float]
    steps: int

    @property
    def n(self) -> int:
        return self.X.shape[1]

    @property
    def middle_position(self) -> tuple[float, float, float]:
        h = self.n // 2
        return tuple(float(c) for c in self.X[:, h, h, h])

    @property
    def middle_velocity(self) -> tuple[float, float, float]:
        h = self.n // 2
        return tuple(float(c) for c in self.V[:, h, h, h])


def _triple(values) -> str:
    return ",".join(f"{float(v):f}" for v in values)


def format_state(X, center, step) -> str:
    """Describe the centre of mass and the nodes around the lattice middle."""
    X = np.asarray(X, dtype=np.float64)
    n = X.shape[1]
    if n < 3:
        raise ValueError("lattice size must be at least 3 to report its state")
    h = n // 2
    return (
        f"t={step}\t"
        f"XC= {_triple(center)} "
        f"X[n/2-1] = {_triple(X[:, h - 1, h, h])}  "
        f"X[n/2] = {_triple(X[:, h, h, h])} "
        f"V[n/2+1] = {_triple(X[:, h + 1, h, h])} "
    )


def format_grid(name, Y) -> str:
    """Render a ``(3, n, n, n)`` field one k-row per line."""
    Y = np.asarray(Y, dtype=np.float64)
    n = Y.shape[1]
    parts = []
    for dim, i, j in product(range(3), range(n), range(n)):
        parts.append(f"\n{name}[{dim}][{i}][{j}][0..{n - 1}] ")
        parts.extend(f"{float(v):.4f} " for v in Y[dim, i, j])
    parts.append("\n")
    return "".join(parts)


def compare_grids(Y, Y_ref, tolerance=1e-7, limit=100):
    """Return up to ``limit`` mismatches between two fields.

    Each mismatch is ``((dim, i, j, k), value, reference, error)``; an empty
    list means the fields agree within ``tolerance``.
    """
    Y = np.asarray(Y, dtype=np.float64)
    Y_ref = np.asarray(Y_ref, dtype=np.float64)
    if Y.shape != Y_ref.shape:
        raise ValueError(f"shapes differ: {Y.shape} and {Y_ref.shape}")
    errors = Y - Y_ref
    bad = np.argwhere(np.abs(errors) > tolerance)[:limit]
    mismatches = []
    for idx in bad:
        where = tuple(int(c) for c in idx)
        mismatches.append((where, float(Y[where]), float(Y_ref[where]), float(errors[where])))
    return mismatches


def simulate(
    n,
    steps,
    dt=DT,
    spring_k=SPRING_K,
    mass=MASS,
    rowwise=True,
    report: Optional[Callable[[np.ndarray, tuple, int], None]] = None,
) -> SimulationResult:
    """Run ``steps - 1`` time steps from the rest lattice with the middle node pushed.

    ``report`` is called with ``(X, center, step)`` before each step.
    """
    X, center = init_positions(n)
    V = zeros(n)
    h = n // 2
    V[:, h, h, h] = INITIAL_SPEED
    forces = compute_forces_rowwise if rowwise else compute_forces

    for step in range(steps - 1):
        if report is not None:
            report(X, center, step)
        F = forces(X, spring_k)
        A = acceleration(F, mass)
        V = velocities(V, A, dt)
        X = positions(X, V, dt)
        center = compute_stats(X)

    return SimulationResult(X=X, V=V, center=center, steps=max(steps - 1, 0))


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def parse_args(argv: Sequence[str]) -> tuple[int, int, bool]:
    """Return ``(steps, n, defaults_used)`` from ``<steps> <n>`` arguments."""
    args = list(argv)
    if len(args) != 2:
        return DEFAULT_STEPS, DEFAULT_SIZE, True
    return _atoi(args[0]), _atoi(args[1]), False


def main(argv=None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    steps, n, defaults_used = parse_args(args)
    if defaults_used:
        print(f"Using default arguments:\nntsteps = {steps}\nN = {n}")
    print(f"Problem size = {n}, steps = {steps}")
    print("Set initial speed")

    def report(X, center, step):
        print(format_state(X, center, step))

    start = time.perf_counter()
    try:
        result = simulate(n, steps, report=report)
    except ValueError as exc:
        print(f"ERROR: {exc}")
        return 1
    elapsed_us = (time.perf_counter() - start) * 1e6
    print(f"somier vec time   {elapsed_us:f} us \n")

    vx, vy, vz = result.middle_velocity
    x, y, z = result.middle_position
    print(f"\tV= {vx:f}, {vy:f}, {vz:f}\t\t X= {x:f}, {y:f}, {z:f}")
    return 0


if __name__ == "__main__":
    sys.exit(main())