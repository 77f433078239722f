"""Tests covering ring geometry and depth ordering."""

from __future__ import annotations

import pytest

from ringmenu.layout import (
    compute_depth,
    compute_position,
    compute_scale,
    layout_item,
    normalize_angle,
    order_by_depth_descending,
)


def _angles(step: float = 0.25):
    count = int(360 / step)
    return [index * step for index in range(count)]


def test_front_and_back_depth() -> None:
    assert compute_depth(270.0, 0.0) == 0.0
    assert compute_depth(90.0, 0.0) == 180.0
    assert compute_depth(0.0, 270.0) == 0.0
    assert compute_depth(180.0, -90.0) == 180.0


def test_depth_is_mirror_symmetric_about_front_axis() -> None:
    for angle in _angles():
        mirrored = normalize_angle(180.0 - angle)
        assert compute_depth(angle, 0.0) == pytest.approx(compute_depth(mirrored, 0.0))


def test_depth_range_covers_full_domain() -> None:
    for offset in (-720.0, -45.5, 0.0, 12.25, 90.0, 1080.0):
        for angle in _angles():
            depth = compute_depth(angle, offset)
            assert 0.0 <= depth <= 180.0


def test_normalize_angle_wraps_into_half_open_range() -> None:
    assert normalize_angle(-90.0) == 270.0
    assert normalize_angle(720.5) == pytest.approx(0.5)
    assert normalize_angle(360.0) == 0.0
    assert normalize_angle(-1e-20) == 0.0


def test_scale_endpoints_and_midpoint() -> None:
    assert compute_scale(0.0, 0.5) == 1.0
    assert compute_scale(180.0, 0.5) == 0.5
    assert compute_scale(90.0, 0.5) == pytest.approx(0.75)


def test_scale_clamps_out_of_range_depth() -> None:
    assert compute_scale(200.0, 0.5) == 0.5
    assert compute_scale(-5.0, 0.5) == 1.0


@pytest.mark.parametrize("min_scale", [0.1, 0.5, 0.99, 1.0])
def test_scale_is_monotonic_in_depth(min_scale: float) -> None:
    depths = [index * 0.5 for index in range(361)]
    scales = [compute_scale(depth, min_scale) for depth in depths]
    assert all(near >= far for near, far in zip(scales, scales[1:]))


def test_position_lies_on_unit_circle() -> None:
    for angle in _angles(step=7.5):
        x, y = compute_position(angle)
        assert x * x + y * y == pytest.approx(1.0)

    front_x, front_y = compute_position(270.0)
    assert front_x == pytest.approx(0.0, abs=1e-12)
    assert front_y == pytest.approx(-1.0)


def test_ordering_is_stable_for_equal_depths() -> None:
    items = [("a", 10.0), ("b", 50.0), ("c", 10.0), ("d", 50.0), ("e", 0.0)]

    ordered = order_by_depth_descending(items, lambda item: item[1])
    assert [name for name, _ in ordered] == ["b", "d", "a", "c", "e"]

    again = order_by_depth_descending(ordered, lambda item: item[1])
    assert again == ordered


def test_layout_item_applies_ellipse_radii() -> None:
    front = layout_item(270.0, 0.0, ring_width=100.0, ring_height=50.0, min_scale=0.5)
    assert front.depth == 0.0
    assert front.scale == 1.0
    assert front.x == pytest.approx(0.0, abs=1e-9)
    assert front.y == pytest.approx(-50.0)

    side = layout_item(0.0, 0.0, ring_width=100.0, ring_height=50.0, min_scale=0.5)
    assert side.depth == 90.0
    assert side.scale == pytest.approx(0.75)
    assert side.x == pytest.approx(100.0)
    assert side.y == pytest.approx(0.0, abs=1e-9)
