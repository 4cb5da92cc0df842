"""Particle interaction kernel over a 3-D grid of boxes (lavaMD)."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from itertools import product

import numpy as np

NUMBER_PAR_PER_BOX = 96


@dataclass(frozen=True)
class Neighbor:
    """A box adjacent to a home box."""

    x: int
    y: int
    z: int
    number: int
    offset: int


@dataclass
class Box:
    """A home box with its position, particle offset and neighbours."""

    x: int
    y: int
    z: int
    number: int
    offset: int
    neighbors: list[Neighbor] = field(default_factory=list)

    @property
    def nn(self) -> int:
        return len(self.neighbors)


def is_integer(text: str) -> bool:
    """Return True if ``text`` is non-empty and made only of ASCII digits."""
    return bool(text) and all("0" <= ch <= "9" for ch in text)


def build_boxes(boxes1d: int) -> list[Box]:
    """Build the ``boxes1d``^3 grid of boxes, each with its existing neighbours."""
    if boxes1d < 0:
        raise ValueError("boxes1d cannot be negative")
    boxes = []
    span = range(boxes1d)
    for number, (i, j, k) in enumerate(product(span, span, span)):
        box = Box(x=k, y=j, z=i, number=number, offset=number * NUMBER_PAR_PER_BOX)
        for dz, dy, dx in product((-1, 0, 1), repeat=3):
            if dz == dy == dx == 0:
                continue
            nz, ny, nx = i + dz, j + dy, k + dx
            if not all(0 <= c < boxes1d for c in (nz, ny, nx)):
                continue
            nnum = nz * boxes1d * boxes1d + ny * boxes1d + nx
            box.neighbors.append(
                Neighbor(x=nx, y=ny, z=nz, number=nnum, offset=nnum * NUMBER_PAR_PER_BOX)
            )
        boxes.append(box)
    return boxes


def random_inputs(number_boxes: int, seed=None) -> tuple[np.ndarray, np.ndarray]:
    """Draw particle distances (v, x, y, z) and charges in the range 0.1 - 1.0."""
    rng = random.Random(seed)
    count = number_boxes * NUMBER_PAR_PER_BOX

    def draw() -> float:
        return rng.randint(1, 10) / 10.0

    rv = np.array([[draw() for _ in range(4)] for _ in range(count)], dtype=np.float32)
    qv = np.array([draw() for _ in range(count)], dtype=np.float32)
    return rv.reshape(count, 4), qv


def kernel(alpha, boxes, rv, qv) -> np.ndarray:
    """Accumulate forces (v, x, y, z) on every particle from its home and neighbour boxes."""
    rv = np.asarray(rv, dtype=np.float32).reshape(-1, 4)
    qv = np.asarray(qv, dtype=np.float32).reshape(-1)
    expected = len(boxes) * NUMBER_PAR_PER_BOX
    if rv.shape[0] != expected or qv.shape[0] != expected:
        raise ValueError(f"expected {expected} particles, got {rv.shape[0]} and {qv.shape[0]}")

    a2 = np.float32(2.0 * alpha * alpha)
    two = np.float32(2.0)
    fv = np.zeros((expected, 4), dtype=np.float32)

    for box in boxes:
        first_i = box.offset
        r_a = rv[first_i:first_i + NUMBER_PAR_PER_BOX]
        f_a = fv[first_i:first_i + NUMBER_PAR_PER_BOX]
        pointers = [box.number] + [nei.number for nei in box.neighbors]
        for pointer in pointers:
            first_j = boxes[pointer].offset
            r_b = rv[first_j:first_j + NUMBER_PAR_PER_BOX]
            q_b = qv[first_j:first_j + NUMBER_PAR_PER_BOX]

            dot = r_a[:, 1:] @ r_b[:, 1:].T
            r2 = r_a[:, 0, None] + r_b[None, :, 0] - dot
            vij = np.exp(-(a2 * r2)).astype(np.float32)
            fs = two * vij
            d = r_a[:, None, 1:] - r_b[None, :, 1:]

            f_a[:, 0] += (q_b[None, :] * vij).sum(axis=1, dtype=np.float32)
            f_a[:, 1:] += (q_b[None, :, None] * (fs[:, :, None] * d)).sum(
                axis=1, dtype=np.float32
            )
    return fv