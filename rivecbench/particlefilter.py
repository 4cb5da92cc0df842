"""Particle filter tracking a moving disk through a synthetic noisy video."""

from __future__ import annotations

import math
import re
import sys
import time
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from rivecbench.pf_model import (
    BACKGROUND,
    DILATION_RADIUS,
    FOREGROUND,
    SeedArray,
    find_index,
    get_neighbors,
    round_double,
    strel_disk,
    video_sequence,
)

USAGE = "openmp.out -x <dimX> -y <dimY> -z <Nfr> -np <Nparticles>"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass(frozen=True)
class FrameEstimate:
    """Estimated object location for one frame and its distance from the start."""

    frame: int
    xe: float
    ye: float
    distance: float


def particle_filter(video, size_x, size_y, frames, seeds, n_particles) -> list[FrameEstimate]:
    """Track the object through ``video`` and return one estimate per frame after the first.

    ``seeds`` is advanced in place; it needs at least ``n_particles`` entries.
    """
    if size_x <= 0 or size_y <= 0 or frames <= 0:
        raise ValueError("video dimensions must be positive")
    if n_particles <= 0:
        raise ValueError("number of particles must be positive")
    if len(seeds) < n_particles:
        raise ValueError(f"need {n_particles} seeds, got {len(seeds)}")
    max_size = size_x * size_y * frames
    flat = np.asarray(video, dtype=np.int64).reshape(-1)
    if flat.size != max_size:
        raise ValueError(f"video holds {flat.size} values, expected {max_size}")

    xe = round_double(size_y / 2.0)
    ye = round_double(size_x / 2.0)
    center_x = int(xe)
    center_y = int(ye)

    disk = strel_disk(DILATION_RADIUS)
    objxy = get_neighbors(disk, DILATION_RADIUS)
    count_ones = len(objxy)
    offset_y = objxy[:, 0].astype(np.int64)
    offset_x = objxy[:, 1].astype(np.int64)

    uniform = 1.0 / n_particles
    weights = np.full(n_particles, uniform)
    array_x = np.full(n_particles, xe)
    array_y = np.full(n_particles, ye)

    estimates: list[FrameEstimate] = []
    for k in range(1, frames):
        for x in range(n_particles):
            array_x[x] += 1 + 5 * seeds.randn(x)
            array_y[x] += -2 + 2 * seeds.randn(x)

        ind_x = np.trunc(array_x).astype(np.int64)[:, None] + offset_x[None, :]
        ind_y = np.trunc(array_y).astype(np.int64)[:, None] + offset_y[None, :]
        ind = np.abs(ind_x * size_y * frames + ind_y * frames + k)
        ind[ind >= max_size] = 0
        values = flat[ind].astype(np.float64)
        terms = ((values - BACKGROUND) ** 2 - (values - FOREGROUND) ** 2) / 50.0
        likelihood = terms.sum(axis=1) / count_ones

        with np.errstate(over="ignore", invalid="ignore", divide="ignore"):
            weights = weights * np.exp(likelihood)
            weights = weights / weights.sum()
            xe = float((array_x * weights).sum())
            ye = float((array_y * weights).sum())
        distance = math.sqrt((xe - center_x) ** 2 + (ye - center_y) ** 2)
        estimates.append(FrameEstimate(frame=k, xe=xe, ye=ye, distance=distance))

        cdf = np.cumsum(weights)
        u1 = uniform * seeds.randu(0)
        u = u1 + np.arange(n_particles) / n_particles
        if np.all(np.isfinite(cdf)):
            chosen = np.minimum(np.searchsorted(cdf, u, side="left"), n_particles - 1)
        else:
            cdf_list = cdf.tolist()
            chosen = np.array([find_index(cdf_list, float(value)) for value in u])

        array_x = array_x[chosen]
        array_y = array_y[chosen]
        weights = np.full(n_particles, uniform)

    return estimates


def _scan_int(text: str, message: str) -> int:
    match = _LEADING_INT.match(text)
    if match is None:
        raise ValueError(message)
    return int(match.group(1))


def parse_args(argv: Sequence[str]) -> tuple[int, int, int, int]:
    """Return ``(size_x, size_y, frames, n_particles)`` from ``-x -y -z -np`` options.

    Raises ValueError carrying the message to show.
    """
    args = list(argv)
    if len(args) != 8:
        raise ValueError(USAGE)
    if (args[0], args[2], args[4], args[6]) != ("-x", "-y", "-z", "-np"):
        raise ValueError(USAGE)

    size_x = _scan_int(args[1], "ERROR: dimX input is incorrect")
    if size_x <= 0:
        raise ValueError("dimX must be > 0")
    size_y = _scan_int(args[3], "ERROR: dimY input is incorrect")
    if size_y <= 0:
        raise ValueError("dimY must be > 0")
    frames = _scan_int(args[5], "ERROR: Number of frames input is incorrect")
    if frames <= 0:
        raise ValueError("number of frames must be > 0")
    n_particles = _scan_int(args[7], "ERROR: Number of particles input is incorrect")
    if n_particles <= 0:
        raise ValueError("Number of particles must be > 0")
    return size_x, size_y, frames, n_particles


def main(argv=None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        size_x, size_y, frames, n_particles = parse_args(args)
    except ValueError as exc:
        print(exc)
        return 0

    seeds = SeedArray.from_time(n_particles, int(time.time()))
    start = time.perf_counter()
    try:
        video = video_sequence(size_x, size_y, frames, seeds)
    except ValueError as exc:
        print(f"ERROR: {exc}")
        return 1
    end_video = time.perf_counter()
    print(f"VIDEO SEQUENCE TOOK {end_video - start:f}")

    estimates = particle_filter(video, size_x, size_y, frames, seeds, n_particles)
    for estimate in estimates:
        print(f"XE: {estimate.xe:f}")
        print(f"YE: {estimate.ye:f}")
        print(f"{estimate.distance:f}")
    end_filter = time.perf_counter()

    print(f"PARTICLE FILTER TOOK {end_filter - end_video:f}")
    print(f"ENTIRE PROGRAM TOOK {end_filter - start:f}")
    return 0


if __name__ == "__main__":
    sys.exit(main())