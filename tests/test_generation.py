"""Tests for footprint, opening and roof builders and the atomic step runner.

Pure geometry is checked directly; host-facing builders run against the
in-memory host, whose internal unit is the millimetre.
"""

from __future__ import annotations

import pytest

from parahouse.config import EAVE_CUTS_TWO_CUT_SQUARE, SILL_HEIGHT_PARAM, STEP_ROOF, STEP_WALLS
from parahouse.errors import HostError, InvalidArgumentError, StepError
from parahouse.generation import (
    build_footprint,
    construct_gable_roof,
    construct_hip_roof,
    construct_walls,
    gable_roof_profile,
    hip_roof_boundary,
    insertion_point,
    opening_request,
    place_door,
    place_window,
    run_step,
)
from parahouse.geometry import Point3, Segment
from parahouse.models.building import Footprint, Level, OpeningKind, TypeCategory
from parahouse.models.house import TypeSelector

# ---------------------------------------------------------------------------
# Footprint
# ---------------------------------------------------------------------------


class TestBuildFootprint:
    @pytest.mark.parametrize("width, depth", [(10000.0, 5000.0), (1.0, 1.0), (12.5, 3.25)])
    def test_closed_rectangle(self, width, depth):
        footprint = build_footprint(width, depth)

        assert len(footprint) == 4
        for i in range(4):
            assert footprint[i].end == footprint[(i + 1) % 4].start
        assert footprint[0].length == footprint[2].length == width
        assert footprint[1].length == footprint[3].length == depth

    def test_front_wall_first(self):
        front = build_footprint(10000.0, 5000.0)[0]
        assert front.start == Point3(-5000.0, -2500.0, 0.0)
        assert front.end == Point3(5000.0, -2500.0, 0.0)

    @pytest.mark.parametrize("width, depth", [(0.0, 5000.0), (10000.0, 0.0), (-1.0, 5.0)])
    def test_non_positive_rejected(self, width, depth):
        with pytest.raises(InvalidArgumentError):
            build_footprint(width, depth)

    def test_footprint_rejects_open_loop(self):
        a, b, c, d = Point3(0, 0), Point3(1, 0), Point3(1, 1), Point3(0, 1)
        with pytest.raises(InvalidArgumentError):
            Footprint((Segment(a, b), Segment(b, c), Segment(c, d), Segment(d, b)))


class TestConstructWalls:
    def test_walls_follow_segment_order(self, memory_host):
        footprint = build_footprint(10000.0, 5000.0)
        base, top = memory_host.find_level("Level 1"), memory_host.find_level("Level 2")

        walls = construct_walls(memory_host, base, top, footprint)

        assert [memory_host.wall_curve(w) for w in walls] == list(footprint)
        assert all(w.data["height"] == 3000.0 for w in walls)
        assert memory_host.committed == [STEP_WALLS] * 4

    def test_inverted_levels_fail_as_step(self, memory_host):
        footprint = build_footprint(10.0, 5.0)
        base, top = memory_host.find_level("Level 2"), memory_host.find_level("Level 1")

        with pytest.raises(StepError) as excinfo:
            construct_walls(memory_host, base, top, footprint)

        assert excinfo.value.step == STEP_WALLS
        assert excinfo.value.index == 0
        assert isinstance(excinfo.value.__cause__, HostError)
        assert memory_host.by_category("wall") == []
        assert memory_host.open_transaction is None


# ---------------------------------------------------------------------------
# Openings
# ---------------------------------------------------------------------------


class TestOpeningPlacement:
    @pytest.mark.parametrize(
        "start, end",
        [
            (Point3(-5000.0, -2500.0), Point3(5000.0, -2500.0)),
            (Point3(0.1, 0.7, 0.3), Point3(1.9, -3.3, 0.3)),
            (Point3(1e-3, 2e6), Point3(-7.25, 3.5)),
        ],
    )
    def test_midpoint_is_exact(self, start, end):
        seg = Segment(start, end)
        assert insertion_point(seg) == (seg.start + seg.end) / 2
        for kind in OpeningKind:
            assert opening_request(seg, kind).insertion_point == (seg.start + seg.end) / 2

    def _wall(self, host):
        footprint = build_footprint(10000.0, 5000.0)
        base, top = host.find_level("Level 1"), host.find_level("Level 2")
        return base, construct_walls(host, base, top, footprint)

    def _type(self, host, category):
        return next(t for t in host.types if t.category == category)

    def test_door_activates_type_and_sits_at_midpoint(self, memory_host):
        level, walls = self._wall(memory_host)
        door_type = self._type(memory_host, TypeCategory.DOOR)
        assert not door_type.active

        door, request = place_door(memory_host, level, walls[0], door_type)

        assert door_type.active
        assert door.data["point"] == Point3(0.0, -2500.0, 0.0)
        assert door.data["host"] is walls[0]
        assert request.kind is OpeningKind.DOOR
        assert request.sill_height is None
        assert door.parameters == {}

    def test_window_sets_sill_height(self, memory_host):
        level, walls = self._wall(memory_host)
        window_type = self._type(memory_host, TypeCategory.WINDOW)

        window, request = place_window(memory_host, level, walls[1], window_type, 1000.0)

        assert window.data["point"] == Point3(5000.0, 0.0, 0.0)
        assert window.parameters[SILL_HEIGHT_PARAM] == 1000.0
        assert request.sill_height == 1000.0

    def test_failed_window_rolls_back_activation(self, memory_host, monkeypatch):
        level, walls = self._wall(memory_host)
        window_type = self._type(memory_host, TypeCategory.WINDOW)

        def refuse(*args, **kwargs):
            raise HostError("sill height above wall top")

        monkeypatch.setattr(memory_host, "set_parameter", refuse)
        with pytest.raises(StepError):
            place_window(memory_host, level, walls[1], window_type, 1000.0)

        assert memory_host.by_category("window") == []
        assert not window_type.active
        assert len(memory_host.by_category("wall")) == 4


# ---------------------------------------------------------------------------
# Roofs
# ---------------------------------------------------------------------------


class TestHipRoof:
    def test_boundary_offsets_by_half_wall_width(self):
        curves = list(build_footprint(10000.0, 5000.0))
        boundary = hip_roof_boundary(curves, 200.0)

        assert boundary.segments[0] == Segment(Point3(-5100.0, -2600.0), Point3(5100.0, -2600.0))
        assert boundary.segments[2] == Segment(Point3(5100.0, 2600.0), Point3(-5100.0, 2600.0))
        for i in range(4):
            assert boundary.segments[i].end == boundary.segments[(i + 1) % 4].start
        assert boundary.slope_angle == 0.5

    def test_needs_four_curves(self):
        curves = list(build_footprint(10.0, 5.0))[:3]
        with pytest.raises(InvalidArgumentError):
            hip_roof_boundary(curves, 0.2)

    def test_every_edge_slopes(self, memory_host):
        base, top = memory_host.find_level("Level 1"), memory_host.find_level("Level 2")
        walls = construct_walls(memory_host, base, top, build_footprint(10000.0, 5000.0))
        roof_type = memory_host.find_type(
            TypeSelector(category=TypeCategory.FOOTPRINT_ROOF, name="Generic - 400mm", family="Basic Roof")
        )

        roof, boundary = construct_hip_roof(memory_host, top, walls, roof_type)

        assert roof.category == "footprint_roof"
        assert roof.data["boundary"] == list(boundary.segments)
        assert roof.parameters["slopes"] == {0: 0.5, 1: 0.5, 2: 0.5, 3: 0.5}
        assert memory_host.committed[-1] == STEP_ROOF


class TestGableRoof:
    @pytest.mark.parametrize("roof_depth, wall_width", [(5000.0, 200.0), (3.7, 0.25), (12.0, 0.0)])
    def test_profile_is_mirrored_about_y0(self, roof_depth, wall_width):
        profile = gable_roof_profile(3000.0, wall_width, 10000.0, roof_depth, 3000.0)
        left, right = profile.segments

        def mirror(p: Point3) -> Point3:
            return Point3(p.x, -p.y, p.z)

        assert mirror(left.start) == right.end
        assert mirror(left.end) == right.start
        assert profile.extrusion_start == -profile.extrusion_end

    def test_scenario_bounds_and_peak(self):
        wall_width = 300.0
        profile = gable_roof_profile(3000.0, wall_width, 10000.0, 5000.0, 3000.0)

        assert profile.extrusion_end == 5000.0 + wall_width / 2
        assert profile.extrusion_start == -(5000.0 + wall_width / 2)
        assert profile.ridge == Point3(0.0, 0.0, 6000.0)
        assert profile.segments[0].start == Point3(0.0, -2650.0, 3000.0)

    def test_construct_sets_eave_cuts(self, memory_host):
        base, top = memory_host.find_level("Level 1"), memory_host.find_level("Level 2")
        walls = construct_walls(memory_host, base, top, build_footprint(10000.0, 5000.0))
        roof_type = next(t for t in memory_host.types if t.category == TypeCategory.EXTRUSION_ROOF)

        roof, profile = construct_gable_roof(memory_host, top, walls, roof_type, 10000.0, 5000.0, 3000.0)

        assert roof.data["start"] == -5100.0
        assert roof.data["end"] == 5100.0
        assert roof.data["profile"] == list(profile.segments)
        assert roof.parameters["eave_cuts"] == EAVE_CUTS_TWO_CUT_SQUARE


# ---------------------------------------------------------------------------
# Step runner
# ---------------------------------------------------------------------------


class TestRunStep:
    def test_returns_result_and_commits(self, memory_host):
        assert run_step(memory_host, "noop", lambda: 42) == 42
        assert memory_host.committed == ["noop"]

    def test_failure_is_typed_and_rolled_back(self, memory_host):
        level = Level("Level 1", 0.0)
        top = Level("Level 2", 3000.0)
        seg = Segment(Point3(0.0, 0.0), Point3(1.0, 0.0))

        def operation():
            memory_host.create_wall(seg, level, top)
            raise RuntimeError("boom")

        with pytest.raises(StepError, match="boom") as excinfo:
            run_step(memory_host, "Build walls", operation)

        assert excinfo.value.step == "Build walls"
        assert excinfo.value.index is None
        assert memory_host.elements == []
        assert memory_host.rolled_back == ["Build walls"]
        assert memory_host.open_transaction is None

    def test_index_is_reported(self, memory_host):
        def operation():
            raise HostError("no room")

        with pytest.raises(StepError, match=r"'Build window' #2 failed: no room") as excinfo:
            run_step(memory_host, "Build window", operation, index=2)

        assert excinfo.value.index == 2
        assert memory_host.rolled_back == ["Build window"]

    def test_mutation_outside_transaction_refused(self, memory_host):
        seg = Segment(Point3(0.0, 0.0), Point3(1.0, 0.0))
        with pytest.raises(HostError):
            memory_host.create_wall(seg, Level("a", 0.0), Level("b", 1.0))
