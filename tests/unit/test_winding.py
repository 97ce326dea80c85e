"""Unit tests for ring winding (signed area and orientation enforcement).

Covers:
- Shoelace sum and signed area sign conventions (x = lon, y = lat)
- enforce_counter_clockwise / enforce_clockwise return the ring or its exact reverse
- Degenerate rings (collinear, empty, single point) are never reversed
- Inputs are not mutated
- Orientation agrees with shapely's LinearRing.is_ccw
"""

from __future__ import annotations

import pytest
from shapely.geometry import LinearRing

from sahara_map.geometry.winding import (
    enforce_clockwise,
    enforce_counter_clockwise,
    is_degenerate,
    shoelace_sum,
    signed_area,
)

CCW_SQUARE = [(0.0, 0.0), (4.0, 0.0), (4.0, 4.0), (0.0, 4.0), (0.0, 0.0)]
CW_SQUARE = list(reversed(CCW_SQUARE))

# Irregular ring in the northern Sahara, counter-clockwise
CCW_DESERT = [
    (-8.7, 27.6),
    (9.5, 23.1),
    (25.0, 20.0),
    (33.2, 31.5),
    (11.4, 37.0),
    (-5.9, 35.8),
    (-8.7, 27.6),
]

COLLINEAR = [(0.0, 0.0), (1.0, 1.0), (2.0, 2.0), (0.0, 0.0)]

SAMPLE_RINGS = [
    CCW_SQUARE,
    CW_SQUARE,
    CCW_DESERT,
    list(reversed(CCW_DESERT)),
    COLLINEAR,
    [],
    [(3.0, 4.0)],
]


class TestSignedArea:
    """Shoelace formula and sign convention."""

    def test_ccw_square_positive(self) -> None:
        assert signed_area(CCW_SQUARE) == pytest.approx(16.0)

    def test_cw_square_negative(self) -> None:
        assert signed_area(CW_SQUARE) == pytest.approx(-16.0)

    def test_shoelace_sum_is_twice_area(self) -> None:
        assert shoelace_sum(CCW_SQUARE) == pytest.approx(2 * signed_area(CCW_SQUARE))

    def test_empty_ring_zero(self) -> None:
        assert signed_area([]) == 0.0

    def test_single_point_zero(self) -> None:
        assert signed_area([(5.0, 5.0)]) == 0.0

    def test_collinear_zero(self) -> None:
        assert signed_area(COLLINEAR) == 0.0
        assert is_degenerate(COLLINEAR)

    def test_third_dimension_ignored(self) -> None:
        ring_3d = [(x, y, 250.0) for x, y in CCW_SQUARE]
        assert signed_area(ring_3d) == pytest.approx(16.0)

    @pytest.mark.parametrize("ring", [CCW_SQUARE, CCW_DESERT], ids=["square", "desert"])
    def test_sign_matches_shapely(self, ring: list[tuple[float, float]]) -> None:
        assert LinearRing(ring).is_ccw is (signed_area(ring) > 0)
        assert LinearRing(ring[::-1]).is_ccw is (signed_area(ring[::-1]) > 0)


class TestEnforceOrientation:
    """Orientation enforcement."""

    def test_ccw_ring_kept(self) -> None:
        assert enforce_counter_clockwise(CCW_SQUARE) == CCW_SQUARE

    def test_cw_ring_reversed_to_ccw(self) -> None:
        assert enforce_counter_clockwise(CW_SQUARE) == CCW_SQUARE

    def test_cw_ring_kept(self) -> None:
        assert enforce_clockwise(CW_SQUARE) == CW_SQUARE

    def test_ccw_ring_reversed_to_cw(self) -> None:
        assert enforce_clockwise(CCW_SQUARE) == CW_SQUARE

    def test_input_not_mutated(self) -> None:
        ring = list(CCW_SQUARE)
        enforce_clockwise(ring)
        assert ring == CCW_SQUARE

    @pytest.mark.parametrize("ring", SAMPLE_RINGS)
    def test_ccw_result_non_negative(self, ring: list[tuple[float, float]]) -> None:
        assert signed_area(enforce_counter_clockwise(ring)) >= 0

    @pytest.mark.parametrize("ring", SAMPLE_RINGS)
    def test_cw_result_non_positive(self, ring: list[tuple[float, float]]) -> None:
        assert signed_area(enforce_clockwise(ring)) <= 0

    @pytest.mark.parametrize("ring", SAMPLE_RINGS)
    def test_result_is_ring_or_exact_reverse(self, ring: list[tuple[float, float]]) -> None:
        for result in (enforce_counter_clockwise(ring), enforce_clockwise(ring)):
            assert result in (ring, ring[::-1])


class TestDegenerateRings:
    """Zero-area rings satisfy both orientations and are never reversed."""

    @pytest.mark.parametrize("ring", [COLLINEAR, [], [(1.0, 2.0)], [(1.0, 2.0), (1.0, 2.0)]])
    def test_not_reversed_either_way(self, ring: list[tuple[float, float]]) -> None:
        assert enforce_counter_clockwise(ring) == ring
        assert enforce_clockwise(ring) == ring

    def test_backtracking_ring_not_reversed(self) -> None:
        """Out-and-back along a line encloses nothing."""
        ring = [(0.0, 0.0), (3.0, 0.0), (0.0, 0.0)]
        assert is_degenerate(ring)
        assert enforce_clockwise(ring) == ring

    def test_tiny_real_area_not_degenerate(self) -> None:
        ring = [(0.0, 0.0), (1e-3, 0.0), (1e-3, 1e-3), (0.0, 1e-3), (0.0, 0.0)]
        assert not is_degenerate(ring)
        assert enforce_clockwise(ring) == ring[::-1]
