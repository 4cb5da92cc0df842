import math

import numpy as np
import pytest

from rivecbench.particlefilter import (
    USAGE,
    FrameEstimate,
    main,
    parse_args,
    particle_filter,
)
from rivecbench.pf_model import SeedArray, video_sequence


def _seeds(count):
    return SeedArray(list(range(1, count + 1)))


def test_parse_args_valid():
    argv = ["-x", "128", "-y", "128", "-z", "10", "-np", "1000"]
    assert parse_args(argv) == (128, 128, 10, 1000)


def test_parse_args_wrong_count():
    with pytest.raises(ValueError) as info:
        parse_args(["-x", "10"])
    assert str(info.value) == USAGE


def test_parse_args_wrong_delimiter():
    with pytest.raises(ValueError) as info:
        parse_args(["-x", "10", "-q", "10", "-z", "3", "-np", "5"])
    assert str(info.value) == USAGE


@pytest.mark.parametrize(
    "argv, message",
    [
        (["-x", "0", "-y", "10", "-z", "3", "-np", "5"], "dimX must be > 0"),
        (["-x", "10", "-y", "-1", "-z", "3", "-np", "5"], "dimY must be > 0"),
        (["-x", "10", "-y", "10", "-z", "0", "-np", "5"], "number of frames must be > 0"),
        (["-x", "10", "-y", "10", "-z", "3", "-np", "0"], "Number of particles must be > 0"),
        (["-x", "abc", "-y", "10", "-z", "3", "-np", "5"], "ERROR: dimX input is incorrect"),
    ],
)
def test_parse_args_errors(argv, message):
    with pytest.raises(ValueError) as info:
        parse_args(argv)
    assert str(info.value) == message


def test_single_frame_gives_no_estimates():
    video = np.full((20, 20, 1), 100)
    assert particle_filter(video, 20, 20, 1, _seeds(4), 4) == []


def test_one_estimate_per_later_frame():
    video = np.full((20, 20, 4), 100)
    estimates = particle_filter(video, 20, 20, 4, _seeds(8), 8)
    assert [e.frame for e in estimates] == [1, 2, 3]
    assert all(isinstance(e, FrameEstimate) for e in estimates)
    assert all(math.isfinite(e.xe) and math.isfinite(e.ye) for e in estimates)
    assert all(e.distance >= 0 for e in estimates)


def test_deterministic_for_equal_seeds():
    seeds_a = SeedArray([11, 22, 33, 44, 55])
    seeds_b = SeedArray([11, 22, 33, 44, 55])
    video = video_sequence(20, 20, 3, SeedArray([7]))
    first = particle_filter(video, 20, 20, 3, seeds_a, 5)
    second = particle_filter(video, 20, 20, 3, seeds_b, 5)
    assert first == second
    assert seeds_a.values == seeds_b.values


def test_seeds_are_advanced():
    seeds = _seeds(6)
    before = list(seeds.values)
    particle_filter(np.full((20, 20, 2), 100), 20, 20, 2, seeds, 6)
    assert seeds.values != before


def test_distance_matches_estimate():
    video = np.full((20, 20, 3), 228)
    for estimate in particle_filter(video, 20, 20, 3, _seeds(5), 5):
        assert estimate.distance == pytest.approx(math.hypot(estimate.xe - 10, estimate.ye - 10))


def test_too_few_seeds():
    with pytest.raises(ValueError):
        particle_filter(np.full((20, 20, 2), 100), 20, 20, 2, _seeds(3), 5)


def test_video_size_mismatch():
    with pytest.raises(ValueError):
        particle_filter(np.full((10, 10, 2), 100), 20, 20, 2, _seeds(5), 5)


def test_nonpositive_particles():
    with pytest.raises(ValueError):
        particle_filter(np.full((20, 20, 2), 100), 20, 20, 2, _seeds(5), 0)


def test_main_bad_arguments_prints_usage(capsys):
    assert main(["-x", "5"]) == 0
    assert capsys.readouterr().out.strip() == USAGE


def test_main_runs(capsys):
    assert main(["-x", "20", "-y", "20", "-z", "3", "-np", "10"]) == 0
    out = capsys.readouterr().out
    assert out.count("XE: ") == 2
    assert out.count("YE: ") == 2
    assert "VIDEO SEQUENCE TOOK" in out
    assert "ENTIRE PROGRAM TOOK" in out