"""Spring-mass lattice ("somier") simulation kernels.

Fields are numpy arrays of shape ``(3, n, n, n)``: the first axis holds the
x, y and z components, the others index the lattice node.
"""

from __future__ import annotations

import numpy as np

DT = 0.001
SPRING_K = 10.0
MASS = 1.0

# Neighbour visiting orders, as (axis, offset) pairs over the node axes.
_POINTWISE_ORDER = ((0, -1), (0, 1), (1, -1), (1, 1), (2, -1), (2, 1))
_ROWWISE_ORDER = ((1, 1), (0, -1), (0, 1), (1, -1), (2, -1), (2, 1))


def zeros(n: int) -> np.ndarray:
    """Return a zeroed ``(3, n, n, n)`` field."""
    return np.zeros((3, n, n, n), dtype=np.float64)


def init_positions(n: int) -> tuple[np.ndarray, tuple[float, float, float]]:
    """Place node ``(i, j, k)`` at position ``(i, j, k)``.

    Returns the positions and their centre of mass.
    """
    if n <= 0:
        raise ValueError("lattice size must be positive")
    X = np.stack(np.indices((n, n, n), dtype=np.float64))
    return X, compute_stats(X)


def boundary(X: np.ndarray, V: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Return copies of ``X`` and ``V`` with the boundary nodes pinned.

    Nodes on the faces i=0, j=0, k=0, k=n-1, i=n-1 and j=n-1 are put back at
    their lattice position and given zero velocity.
    """
    X = np.array(X, dtype=np.float64)
    V = np.array(V, dtype=np.float64)
    n = X.shape[1]
    if n == 0:
        return X, V
    grid = np.stack(np.indices((n, n, n), dtype=np.float64))
    faces = np.zeros((n, n, n), dtype=bool)
    faces[0, :, :] = faces[:, 0, :] = faces[:, :, 0] = True
    faces[:, :, n - 1] = faces[n - 1, :, :] = faces[:, n - 1, :] = True
    X[:, faces] = grid[:, faces]
    V[:, faces] = 0.0
    return X, V


def force_contribution(X, F, i, j, k, neighbor, spring_k=SPRING_K):
    """Add the spring force that ``neighbor`` exerts on interior node ``(i, j, k)``.

    ``F`` is updated in place; the added force ``(fx, fy, fz)`` is returned.
    """
    n = X.shape[1]
    ni, nj, nk = neighbor
    if not all(1 <= c < n - 1 for c in (i, j, k)):
        raise IndexError(f"node ({i}, {j}, {k}) is not interior to a lattice of size {n}")
    if not all(0 <= c < n for c in (ni, nj, nk)):
        raise IndexError(f"neighbour ({ni}, {nj}, {nk}) is outside a lattice of size {n}")

    dx, dy, dz = (float(X[c, ni, nj, nk] - X[c, i, j, k]) for c in range(3))
    dl = (dx * dx + dy * dy + dz * dz) ** 0.5
    spring_f = 0.25 * spring_k * (dl - 1)
    force = (spring_f * dx / dl, spring_f * dy / dl, spring_f * dz / dl)
    for c, value in enumerate(force):
        F[c, i, j, k] += value
    return force


def _pair_forces(X: np.ndarray, axis: int, offset: int, spring_k: float) -> np.ndarray:
    """Spring force on every interior node from its neighbour along ``axis``."""
    n = X.shape[1]
    interior = [slice(1, n - 1)] * 3
    shifted = list(interior)
    shifted[axis] = slice(1 + offset, n - 1 + offset)
    home = X[(slice(None), *interior)]
    other = X[(slice(None), *shifted)]
    delta = other - home
    dl = np.sqrt(delta[0] * delta[0] + delta[1] * delta[1] + delta[2] * delta[2])
    spring_f = 0.25 * spring_k * (dl - 1)
    return spring_f * delta / dl


def _forces(X, spring_k: float, order) -> np.ndarray:
    X = np.asarray(X, dtype=np.float64)
    n = X.shape[1]
    F = zeros(n)
    if n < 3:
        return F
    interior = (slice(None), slice(1, n - 1), slice(1, n - 1), slice(1, n - 1))
    for axis, offset in order:
        F[interior] += _pair_forces(X, axis, offset, spring_k)
    return F


def compute_forces(X, spring_k=SPRING_K) -> np.ndarray:
    """Spring forces on all interior nodes from their six lattice neighbours."""
    return _forces(X, spring_k, _POINTWISE_ORDER)


def compute_forces_rowwise(X, spring_k=SPRING_K) -> np.ndarray:
    """Spring forces accumulated row by row: j+1, i-1, i+1, j-1, then k-1, k+1."""
    return _forces(X, spring_k, _ROWWISE_ORDER)


def acceleration(F, mass=MASS) -> np.ndarray:
    """Return ``F / mass``."""
    if mass == 0:
        raise ZeroDivisionError("mass must be non-zero")
    return np.asarray(F, dtype=np.float64) * (1.0 / mass)


def velocities(V, A, dt=DT) -> np.ndarray:
    """Return velocities advanced by one step of acceleration ``A``."""
    return np.asarray(V, dtype=np.float64) + np.asarray(A, dtype=np.float64) * dt


def positions(X, V, dt=DT) -> np.ndarray:
    """Return positions advanced by one step of velocity ``V``."""
    return np.asarray(X, dtype=np.float64) + np.asarray(V, dtype=np.float64) * dt


def compute_stats(X) -> tuple[float, float, float]:
    """Return the centre of mass ``(x, y, z)`` of all nodes."""
    X = np.asarray(X, dtype=np.float64)
    count = X[0].size
    if count == 0:
        raise ValueError("cannot compute the centre of an empty lattice")
    sums = X.reshape(3, -1).sum(axis=1)
    return tuple(float(s) / count for s in sums)