"""Tests for the pure geometry helpers: increments, anchor loops, primitives."""

from __future__ import annotations

import pytest

from parahouse.errors import InvalidArgumentError
from parahouse.geometry import (
    YZ_PLANE,
    Point3,
    Segment,
    anchor_points,
    half_value,
    half_value_with_offset,
)


class TestIncrement:
    def test_half_value(self):
        assert half_value(10000.0) == 5000.0
        assert half_value(0.0) == 0.0

    def test_half_value_with_offset(self):
        assert half_value_with_offset(100.0, 10000.0) == 5100.0

    def test_negative_offset_shrinks(self):
        assert half_value_with_offset(-100.0, 1000.0) == 400.0


class TestAnchorPoints:
    @pytest.mark.parametrize("width, depth", [(10000.0, 5000.0), (3.0, 7.5), (0.2, 0.2)])
    def test_closed_loop_with_half_extents(self, width, depth):
        points = anchor_points(half_value(width), half_value(depth))

        assert len(points) == 5
        assert points[0] == points[4]
        for p in points:
            assert abs(p.x) == width / 2
            assert abs(p.y) == depth / 2
            assert p.z == 0.0

    def test_counter_clockwise_from_bottom_left(self):
        points = anchor_points(2.0, 1.0)
        assert [p.as_tuple() for p in points] == [
            (-2.0, -1.0, 0.0),
            (2.0, -1.0, 0.0),
            (2.0, 1.0, 0.0),
            (-2.0, 1.0, 0.0),
            (-2.0, -1.0, 0.0),
        ]

    def test_consecutive_points_differ_in_one_axis(self):
        points = anchor_points(4.0, 3.0)
        for a, b in zip(points, points[1:]):
            assert (a.x != b.x) + (a.y != b.y) + (a.z != b.z) == 1

    def test_negative_extent_rejected(self):
        with pytest.raises(InvalidArgumentError):
            anchor_points(-1.0, 1.0)


class TestPoint3:
    def test_arithmetic(self):
        a = Point3(1.0, 2.0, 3.0)
        b = Point3(3.0, 2.0, 1.0)
        assert a + b == Point3(4.0, 4.0, 4.0)
        assert a - b == Point3(-2.0, 0.0, 2.0)
        assert a * 2 == Point3(2.0, 4.0, 6.0)
        assert (a + b) / 2 == Point3(2.0, 2.0, 2.0)
        assert -a == Point3(-1.0, -2.0, -3.0)

    def test_cross_and_distance(self):
        assert Point3(1.0, 0.0, 0.0).cross(Point3(0.0, 1.0, 0.0)) == Point3(0.0, 0.0, 1.0)
        assert Point3(0.0, 0.0, 0.0).distance_to(Point3(3.0, 4.0, 0.0)) == 5.0


class TestSegment:
    def test_degenerate_segment_rejected(self):
        p = Point3(1.0, 1.0, 0.0)
        with pytest.raises(InvalidArgumentError):
            Segment(p, p)

    def test_length_direction_midpoint(self):
        seg = Segment(Point3(-5.0, -2.5), Point3(5.0, -2.5))
        assert seg.length == 10.0
        assert seg.direction == Point3(1.0, 0.0, 0.0)
        assert seg.midpoint == Point3(0.0, -2.5, 0.0)

    def test_offset_moves_each_end(self):
        seg = Segment(Point3(0.0, 0.0), Point3(1.0, 0.0))
        moved = seg.offset(Point3(-1.0, -1.0), Point3(1.0, -1.0))
        assert moved == Segment(Point3(-1.0, -1.0), Point3(2.0, -1.0))


class TestReferencePlane:
    def test_yz_plane_coordinates(self):
        assert YZ_PLANE.y_dir == Point3(0.0, 0.0, 1.0)
        assert YZ_PLANE.to_plane_coords(Point3(7.0, -2.0, 3.0)) == (-2.0, 3.0)
