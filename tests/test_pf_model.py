import math

import numpy as np
import pytest

from rivecbench.pf_model import (
    LCG_C,
    LCG_M,
    SeedArray,
    add_noise,
    calc_likelihood_sum,
    dilate_matrix,
    find_index,
    find_index_bin,
    get_neighbors,
    imdilate_disk,
    round_double,
    set_if,
    strel_disk,
    video_sequence,
)


def test_randu_from_zero_seed():
    seeds = SeedArray([0])
    value = seeds.randu(0)
    assert seeds[0] == LCG_C
    assert value == LCG_C / LCG_M


def test_randu_stays_in_unit_interval_and_matches_seed():
    seeds = SeedArray([0, 1, 2, 12345, -7])
    for index in range(len(seeds)):
        for _ in range(20):
            value = seeds.randu(index)
            assert 0.0 <= value < 1.0
            assert value == abs(seeds[index] / LCG_M)
            assert -(2**31) <= seeds[index] < 2**31


def test_randu_overflow_wraps_to_negative_seed():
    seeds = SeedArray([2])
    seeds.randu(0)
    assert seeds[0] < 0


def test_randn_advances_seed_twice():
    a = SeedArray([3, 4])
    b = SeedArray([3, 4])
    a.randn(1)
    b.randu(1)
    b.randu(1)
    assert a.values == b.values


def test_randn_is_reproducible():
    a = SeedArray([17])
    b = SeedArray([17])
    assert [a.randn(0) for _ in range(10)] == [b.randn(0) for _ in range(10)]


def test_from_time_multiplies_by_index():
    seeds = SeedArray.from_time(4, 10)
    assert seeds.values == [0, 10, 20, 30]
    with pytest.raises(ValueError):
        SeedArray.from_time(-1, 10)


def test_round_double_truncates():
    assert round_double(2.7) == 2.0
    assert round_double(2.2) == 2.0
    assert round_double(-1.5) == -1.0


def test_set_if_replaces_only_matches():
    video = np.array([[[0, 1], [2, 0]]])
    out = set_if(video, 0, 100)
    assert out.tolist() == [[[100, 1], [2, 100]]]
    assert video.tolist() == [[[0, 1], [2, 0]]]


def test_add_noise_is_reproducible_and_keeps_shape():
    video = np.full((3, 3, 2), 100)
    a = add_noise(video, SeedArray([0]))
    b = add_noise(video, SeedArray([0]))
    assert a.shape == video.shape
    assert np.array_equal(a, b)
    assert not np.array_equal(a, video)


def test_strel_disk_of_radius_five():
    disk = strel_disk(5)
    assert disk.shape == (9, 9)
    assert int(disk.sum()) == 69
    assert disk[4, 4] == 1
    assert disk[0, 0] == 0
    assert np.array_equal(disk, disk.T)


def test_strel_disk_rejects_non_positive_radius():
    with pytest.raises(ValueError):
        strel_disk(0)


def test_get_neighbors_offsets():
    disk = strel_disk(5)
    neighbors = get_neighbors(disk, 5)
    assert neighbors.shape == (int(disk.sum()), 2)
    assert neighbors[:, 0].sum() == 0
    assert neighbors[:, 1].sum() == 0
    assert np.abs(neighbors).max() <= 4
    assert [0.0, 0.0] in neighbors.tolist()
    # rows follow x ascending: the first row belongs to the top edge of the disk
    assert neighbors[0, 1] == -4


def test_dilate_matrix_in_place():
    matrix = np.zeros((10, 10, 1), dtype=np.int64)
    dilate_matrix(matrix, 5, 5, 0, 5)
    assert matrix[5, 5, 0] == 1
    assert matrix[1, 5, 0] == 1
    assert matrix[9, 5, 0] == 1
    assert matrix[0, 5, 0] == 0
    assert matrix[0, 0, 0] == 0


def test_imdilate_disk_matches_single_dilation():
    source = np.zeros((10, 10, 2), dtype=np.int64)
    source[5, 5, 1] = 1
    expected = np.zeros_like(source)
    dilate_matrix(expected, 5, 5, 1, 5)
    result = imdilate_disk(source, 5)
    assert np.array_equal(result, expected)
    assert int(source.sum()) == 1
    assert int(result[:, :, 0].sum()) == 0


def test_video_sequence_foreground_and_background():
    a = video_sequence(10, 10, 3, SeedArray([0]))
    b = video_sequence(10, 10, 3, SeedArray([0]))
    assert a.shape == (10, 10, 3)
    assert np.array_equal(a, b)
    assert a[5, 5, 0] > 164
    assert a[0, 0, 0] < 164


def test_video_sequence_rejects_bad_sizes():
    with pytest.raises(ValueError):
        video_sequence(0, 10, 3, SeedArray([0]))


def test_calc_likelihood_sum_antisymmetric():
    fg = np.full((2, 2, 2), 228)
    bg = np.full((2, 2, 2), 100)
    indices = [0, 3, 7]
    assert calc_likelihood_sum(fg, indices) > 0
    assert math.isclose(calc_likelihood_sum(fg, indices), -calc_likelihood_sum(bg, indices))
    assert calc_likelihood_sum(fg, []) == 0.0


def test_find_index():
    cdf = [0.1, 0.5, 0.9]
    assert find_index(cdf, 0.5) == 1
    assert find_index(cdf, 0.0) == 0
    assert find_index(cdf, 2.0) == 2
    assert find_index([], 0.5) == -1


def test_find_index_bin():
    cdf = [0.1, 0.5, 0.9]
    assert find_index_bin(cdf, 0, 2, 0.3) == 1
    assert find_index_bin(cdf, 0, 2, 0.5) == 1
    assert find_index_bin([0.2, 0.2, 0.2], 0, 2, 0.2) == 0
    assert find_index_bin(cdf, 2, 1, 0.3) == -1
    assert find_index_bin(cdf, 0, 2, 0.95) == -1