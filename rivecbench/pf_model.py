"""Synthetic video model and helpers for the particle filter benchmark.

Videos are integer numpy arrays of shape ``(size_x, size_y, frames)``; their
row-major flattening matches the flat indices used by the filter.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, Sequence

import numpy as np

PI = 3.1415926535897932

# Linear congruential generator settings (GCC's values).
LCG_M = 2147483647
LCG_A = 1103515245
LCG_C = 12345

DILATION_RADIUS = 5
BACKGROUND = 100
FOREGROUND = 228


def _wrap32(value: int) -> int:
    """Wrap an integer to the signed 32-bit range."""
    return ((value + 2**31) % 2**32) - 2**31


def _trunc_mod(value: int, modulus: int) -> int:
    """Remainder with the sign of the dividend (truncating division)."""
    remainder = abs(value) % modulus
    return -remainder if value < 0 else remainder


@dataclass
class SeedArray:
    """Per-particle seeds of a 32-bit linear congruential generator."""

    values: list[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.values = [_wrap32(int(v)) for v in self.values]

    @classmethod
    def from_time(cls, count: int, now: int) -> "SeedArray":
        """Seed particle ``i`` with ``now * i``, truncated to 32 bits."""
        if count < 0:
            raise ValueError("seed count cannot be negative")
        return cls([int(now) * i for i in range(count)])

    def __len__(self) -> int:
        return len(self.values)

    def __getitem__(self, index: int) -> int:
        return self.values[index]

    def randu(self, index: int) -> float:
        """Advance seed ``index`` and return a uniform number in [0, 1)."""
        num = _wrap32(LCG_A * self.values[index] + LCG_C)
        self.values[index] = _trunc_mod(num, LCG_M)
        return abs(self.values[index] / LCG_M)

    def randn(self, index: int) -> float:
        """Return a normally distributed number (Box-Muller), advancing seed ``index`` twice."""
        u = self.randu(index)
        v = self.randu(index)
        cosine = math.cos(2 * PI * v)
        rt = -2 * math.log(u) if u > 0 else math.inf
        return math.sqrt(rt) * cosine


def round_double(value: float) -> float:
    """Return ``value`` truncated toward zero, as the benchmark's rounding does."""
    return float(int(value))


def set_if(video, test_value: int, new_value: int) -> np.ndarray:
    """Return a copy of ``video`` with every ``test_value`` replaced by ``new_value``."""
    video = np.asarray(video)
    return np.where(video == test_value, new_value, video).astype(video.dtype, copy=False)


def add_noise(video, seeds: SeedArray) -> np.ndarray:
    """Return ``video`` plus ``int(5 * randn)`` per element, drawn from seed 0 in row-major order."""
    noisy = np.array(video, dtype=np.int64)
    for idx in np.ndindex(noisy.shape):
        noisy[idx] += int(5 * seeds.randn(0))
    return noisy


def strel_disk(radius: int) -> np.ndarray:
    """Return the ``(2r-1) x (2r-1)`` disk structuring element of ``radius``."""
    if radius <= 0:
        raise ValueError("radius must be positive")
    diameter = radius * 2 - 1
    offsets = np.arange(diameter, dtype=np.float64) - radius + 1
    distance = np.sqrt(offsets[:, None] ** 2 + offsets[None, :] ** 2)
    return (distance < radius).astype(np.int64)


def dilate_matrix(matrix: np.ndarray, pos_x: int, pos_y: int, pos_z: int, error: int) -> None:
    """Set to 1, in place, the cells of frame ``pos_z`` closer than ``error`` to ``(pos_x, pos_y)``.

    The window spans ``[pos - error, pos + error)`` clipped to the frame.
    """
    dim_x, dim_y = matrix.shape[0], matrix.shape[1]
    start_x, end_x = max(pos_x - error, 0), min(pos_x + error, dim_x)
    start_y, end_y = max(pos_y - error, 0), min(pos_y + error, dim_y)
    if start_x >= end_x or start_y >= end_y:
        return
    xs = np.arange(start_x, end_x)
    ys = np.arange(start_y, end_y)
    distance = np.sqrt(
        (xs[:, None] - pos_x).astype(np.float64) ** 2 + (ys[None, :] - pos_y).astype(np.float64) ** 2
    )
    window = matrix[start_x:end_x, start_y:end_y, pos_z]
    window[distance < error] = 1


def imdilate_disk(matrix, error: int) -> np.ndarray:
    """Return a new video in which every cell equal to 1 in ``matrix`` is dilated by a disk."""
    matrix = np.asarray(matrix)
    dilated = np.zeros(matrix.shape, dtype=np.int64)
    for z in range(matrix.shape[2]):
        for x, y in zip(*np.nonzero(matrix[:, :, z] == 1)):
            dilate_matrix(dilated, int(x), int(y), z, error)
    return dilated


def get_neighbors(disk, radius: int) -> np.ndarray:
    """Return the ``(dy, dx)`` offsets from the centre of every set cell of ``disk``.

    Rows follow the disk in row-major order.
    """
    disk = np.asarray(disk)
    center = radius - 1
    rows = [
        (float(y - center), float(x - center))
        for x, y in zip(*np.nonzero(disk))
    ]
    return np.array(rows, dtype=np.float64).reshape(-1, 2)


def video_sequence(size_x: int, size_y: int, frames: int, seeds: SeedArray) -> np.ndarray:
    """Build the noisy synthetic video of a single disk moving linearly."""
    if size_x <= 0 or size_y <= 0 or frames <= 0:
        raise ValueError("video dimensions must be positive")
    max_size = size_x * size_y * frames
    flat = np.zeros(max_size, dtype=np.int64)

    x0 = int(round_double(size_y / 2.0))
    y0 = int(round_double(size_x / 2.0))
    start = x0 * size_y * frames + y0 * frames
    if not 0 <= start < max_size:
        raise ValueError("object centre lies outside the video")
    flat[start] = 1

    for k in range(1, frames):
        xk = abs(x0 + (k - 1))
        yk = abs(y0 - 2 * (k - 1))
        pos = yk * size_y * frames + xk * frames + k
        flat[pos if pos < max_size else 0] = 1

    video = imdilate_disk(flat.reshape(size_x, size_y, frames), DILATION_RADIUS)
    video = set_if(video, 0, BACKGROUND)
    video = set_if(video, 1, FOREGROUND)
    return add_noise(video, seeds)


def calc_likelihood_sum(video, indices: Iterable[int]) -> float:
    """Sum ``((I - 100)^2 - (I - 228)^2) / 50`` over the flat ``indices`` of ``video``."""
    flat = np.asarray(video).reshape(-1)
    total = 0.0
    for index in indices:
        value = float(flat[index])
        total += ((value - BACKGROUND) ** 2 - (value - FOREGROUND) ** 2) / 50.0
    return total


def find_index(cdf: Sequence[float], value: float) -> int:
    """Return the first index with ``cdf[i] >= value``, else the last index."""
    return next((i for i, c in enumerate(cdf) if c >= value), len(cdf) - 1)


def find_index_bin(cdf: Sequence[float], begin: int, end: int, value: float) -> int:
    """Bisection search for the first index with ``cdf[i] >= value`` within ``[begin, end]``.

    Returns -1 when the search cannot place the value.
    """
    seen = set()
    while end >= begin:
        if (begin, end) in seen:
            return -1
        seen.add((begin, end))
        middle = begin + (end - begin) // 2
        if not 0 <= middle < len(cdf):
            return -1
        if cdf[middle] >= value:
            if middle == 0 or cdf[middle - 1] < value:
                return middle
            if cdf[middle - 1] == value:
                while middle > 0 and cdf[middle - 1] == value:
                    middle -= 1
                return middle
        if cdf[middle] > value:
            end = middle + 1
        else:
            begin = middle - 1
    return -1