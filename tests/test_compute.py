import numpy as np
import pytest

from mandeldive.compute import compute_escape_counts, escape_counts_for, escape_time
from mandeldive.transform import pixel_to_plane
from mandeldive.viewport import CanvasDimensions, Viewport


def test_point_outside_escape_disc_is_zero() -> None:
    assert escape_time(3.0, 3.0, 100) == 0
    assert escape_time(-2.5, 0.5, 1000) == 0


def test_root_point_never_escapes() -> None:
    assert escape_time(-0.5, 0.0, 500) == 500
    assert escape_time(-0.5, 0.0, 1) == 1


def test_origin_is_in_set() -> None:
    assert escape_time(0.0, 0.0, 250) == 250


def test_escape_counts_match_naive_loop() -> None:
    # c = 1: z = 0, 1, 2, 5 -> |z|^2 > 4 after 3 iterations
    assert escape_time(1.0, 0.0, 100) == 3
    # c = 0.5: z = 0.5, 0.75, 1.0625, 1.6289, 3.1533 -> 5 iterations
    assert escape_time(0.5, 0.0, 100) == 5


@pytest.mark.parametrize("point", [(-0.75, 0.1), (0.285, 0.01), (-0.7463, 0.1102)])
def test_counts_are_monotonic_in_cap(point) -> None:
    caps = [10, 20, 50, 100, 200, 400, 800]
    counts = [escape_time(point[0], point[1], n) for n in caps]
    assert counts == sorted(counts)
    for n, count in zip(caps, counts):
        assert 0 <= count <= n


def test_lower_cap_never_exceeds_itself() -> None:
    full = escape_time(-0.75, 0.1, 1000)
    for cap in (5, 17, 31):
        assert escape_time(-0.75, 0.1, cap) == min(full, cap)


def test_frame_counts_match_per_point_evaluation() -> None:
    view = Viewport(center_x=-0.75, center_y=0.1, zoom=20.0, max_iterations=200)
    canvas = CanvasDimensions(32, 24)
    counts = escape_counts_for(view, canvas)
    assert counts.shape == (24, 32)
    for px, py in [(0, 0), (31, 23), (16, 12), (5, 19), (27, 3)]:
        x0, y0 = pixel_to_plane(px, py, view, canvas)
        assert counts[py, px] == escape_time(x0, y0, 200)


def test_frame_is_deterministic() -> None:
    args = (np.float64(-0.5), np.float64(0.0), np.float64(1.0), 40, 30, 80)
    assert np.array_equal(compute_escape_counts(*args), compute_escape_counts(*args))


def test_empty_canvas() -> None:
    counts = escape_counts_for(Viewport(), CanvasDimensions(0, 10))
    assert counts.shape == (10, 0)
