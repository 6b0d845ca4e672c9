import logging
import math
import random

import pytest

from bluenoise.analysis import min_pairwise_distance, separation_violations
from bluenoise.common import bounds_contains, bounds_from_origin_size
from bluenoise.density import circle_mask, radial_separation
from bluenoise.policy import ConstantSeparation, FunctionSeparation
from bluenoise.poisson import (
    PoissonDiskConfig,
    poisson_disk_distribution,
    poisson_disk_distribution_fn,
    poisson_disk_distribution_masked,
    poisson_disk_from_config,
    sample,
)
from bluenoise.rand import NumpyRandom, PyRandom


@pytest.mark.parametrize("seed", [0, 1, 2])
def test_square_packing(square, seed):
    points = poisson_disk_distribution(10., square, [], 30, seed)
    assert 60 <= len(points) <= 110
    assert separation_violations(points, 10.) == []
    assert min_pairwise_distance(points) >= 10.
    assert all(bounds_contains(square, p) for p in points)


def test_separation_too_large_keeps_center_only():
    points = poisson_disk_distribution(10., (0., 0., 1., 1.), [], 10, PyRandom(5))
    assert points == [(0.5, 0.5)]


def test_initial_points_are_the_prefix(square):
    initial = [(5., 5.), (50., 50.)]
    points = poisson_disk_distribution(10., square, initial, 30, 9)
    assert points[:2] == initial
    assert len(points) > 2
    assert separation_violations(points, 10.) == []


def test_center_seeds_an_empty_run(square):
    points = poisson_disk_distribution(10., square, [], 30, 1)
    assert points[0] == (50., 50.)


def test_same_seed_same_points(square):
    a = poisson_disk_distribution(7., square, [], 20, PyRandom(42))
    b = poisson_disk_distribution(7., square, [], 20, PyRandom(42))
    assert a == b

    c = poisson_disk_distribution(7., square, [], 20, NumpyRandom(42))
    d = poisson_disk_distribution(7., square, [], 20, NumpyRandom(42))
    assert c == d


def test_more_candidates_pack_denser(square):
    sparse = poisson_disk_distribution(5., square, [], 1, 3)
    dense = poisson_disk_distribution(5., square, [], 30, 3)
    assert len(dense) >= len(sparse)


def test_scripted_walk_along_x(square, scripted):
    # radius == separation and angle == 0 for every candidate
    rng = scripted([0.0])
    points = poisson_disk_distribution(10., square, [], 3, rng)
    assert points == [(50., 50.), (60., 50.), (70., 50.), (80., 50.), (90., 50.), (100., 50.)]
    assert rng.int_calls == [(0, 0)] * 6


def test_scripted_walk_along_y(square, scripted):
    rng = scripted([0.0, 0.25])
    points = poisson_disk_distribution(10., square, [], 2, rng)
    ys = [p[1] for p in points]
    assert ys == pytest.approx([50., 60., 70., 80., 90., 100.])
    assert all(p[0] == pytest.approx(50.) for p in points)


def test_random_pick_covers_whole_active_list(square, scripted):
    rng = scripted([0.0], ints=[1, 0])
    initial = [(10., 10.), (90., 90.), (10., 90.)]
    sample(ConstantSeparation(5.), square, initial, 1, rng)
    assert rng.int_calls[0] == (0, 2)


def test_function_matches_constant(square):
    a = poisson_disk_distribution(8., square, [], 15, 21)
    b = poisson_disk_distribution_fn(lambda p: 8., square, [], 15, 21)
    assert a == b


def test_function_separation(square):
    fn = radial_separation((50., 50.), 4., 12., 50.)
    points = poisson_disk_distribution_fn(fn, square, [], 20, 4)
    assert len(points) > 10
    assert min_pairwise_distance(points) >= 4.
    assert all(bounds_contains(square, p) for p in points)


def test_masked_points_satisfy_mask(square):
    mask = circle_mask((50., 50.), 30.)
    points = poisson_disk_distribution_masked(lambda p: 6., mask, square, [], 20, 8)
    assert len(points) > 10
    assert all(mask(p) for p in points)
    assert min_pairwise_distance(points) >= 6.


def test_masked_center_rejected_is_empty(square):
    points = poisson_disk_distribution_masked(lambda p: 6., lambda p: False, square, [], 20, 8)
    assert points == []


def test_masked_initial_points_kept_verbatim(square):
    initial = [(1., 1.)]
    mask = circle_mask((50., 50.), 10.)
    points = poisson_disk_distribution_masked(lambda p: 5., mask, square, initial, 20, 8)
    assert points == initial


@pytest.mark.parametrize("k", [0, -5])
def test_no_candidates(square, k):
    assert poisson_disk_distribution(10., square, [], k, 1) == [(50., 50.)]


@pytest.mark.parametrize("bounds, center", [
    ((5., 5., 5., 5.), (5., 5.)),
    ((10., 10., 0., 0.), (5., 5.)),
])
def test_degenerate_domain(bounds, center):
    assert poisson_disk_distribution(1., bounds, [], 30, 1) == [center]


@pytest.mark.parametrize("bounds", [
    (0., 0., math.nan, 100.),
    (0., 0., math.inf, 100.),
    (-math.inf, 0., 100., 100.),
])
def test_non_finite_domain(bounds, caplog):
    with caplog.at_level(logging.DEBUG, logger="bluenoise.poisson"):
        assert poisson_disk_distribution(10., bounds, [], 30, 1) == []
    assert "not finite" in caplog.text


def test_non_finite_domain_keeps_initial_points():
    points = poisson_disk_distribution(10., (0., 0., math.nan, 100.), [(1., 2.)], 30, 1)
    assert points == [(1., 2.)]


@pytest.mark.parametrize("separation", [0., -3., math.nan, math.inf])
def test_bad_separation_degrades(square, separation, caplog):
    with caplog.at_level(logging.DEBUG, logger="bluenoise.poisson"):
        points = poisson_disk_distribution(separation, square, [], 30, 1)
    assert points == [(50., 50.)]
    assert "spawns nothing" in caplog.text


def test_bad_local_separation_only_stops_that_point(square):
    fn = FunctionSeparation(lambda p: 10. if p == (50., 50.) else math.nan)
    points = sample(fn, square, [], 30, 2)
    assert 1 < len(points) <= 31


def test_initial_point_outside_domain(square, caplog):
    with caplog.at_level(logging.DEBUG, logger="bluenoise.grid"):
        points = poisson_disk_distribution(10., square, [(500., 500.)], 30, 1)
    assert points == [(500., 500.)]
    assert "outside the grid" in caplog.text


def test_run_summary_logged(square, caplog):
    with caplog.at_level(logging.DEBUG, logger="bluenoise.poisson"):
        points = poisson_disk_distribution(10., square, [], 30, 1)
    assert f"{len(points)} points" in caplog.text


def test_negative_origin_domain():
    bounds = bounds_from_origin_size((-60., -40.), (120., 80.))
    points = poisson_disk_distribution(9., bounds, [], 30, 12)
    assert points[0] == (0., 0.)
    assert len(points) > 40
    assert all(bounds_contains(bounds, p) for p in points)
    assert separation_violations(points, 9.) == []


def test_positive_origin_domain():
    bounds = (200., 300., 300., 400.)
    points = poisson_disk_distribution(10., bounds, [], 30, 12)
    assert len(points) > 50
    assert all(bounds_contains(bounds, p) for p in points)
    assert separation_violations(points, 10.) == []


def test_from_config():
    cfg = PoissonDiskConfig(width=100, height=100, separation=10., k=30, seed=3)
    assert cfg.bounds == (0., 0., 100., 100.)
    assert poisson_disk_from_config(cfg) == poisson_disk_distribution(10., cfg.bounds, [], 30, 3)


class RecordingSeparation:
    """Separation growing with x; remembers which parent spawned each candidate."""

    def __init__(self):
        self.current = None
        self.spawned_with = {}

    def local_separation(self, p):
        self.current = 4. + p[0] / 10.
        return self.current

    def is_admissible(self, p):
        self.spawned_with[p] = self.current
        return True


def test_each_point_respects_its_parent_separation(square, scripted):
    r = random.Random(17)
    rng = scripted([r.random() for _ in range(50000)], ints=[r.randrange(64) for _ in range(1000)])
    policy = RecordingSeparation()
    points = sample(policy, square, [], 20, rng)
    assert len(points) > 20

    for j, p in enumerate(points[1:], start=1):
        dist = policy.spawned_with[p]
        for q in points[:j]:
            assert math.dist(p, q) >= dist


def test_sample_accepts_bare_separation(square):
    assert sample(10., square, [], 20, 5) == poisson_disk_distribution(10., square, [], 20, 5)
    assert sample(lambda p: 6., square, [], 20, 5) == poisson_disk_distribution_fn(lambda p: 6., square, [], 20, 5)
