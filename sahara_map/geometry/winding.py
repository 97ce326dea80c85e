"""Ring winding: signed area and orientation enforcement.

Orientation uses x = longitude, y = latitude; a positive signed area means
the ring runs counter-clockwise.

Degenerate rings (collinear points, fewer than three positions, empty)
have an area within ``DEGENERATE_AREA_TOLERANCE`` of zero.  They satisfy
both orientation checks and are returned unreversed by both enforce
functions.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sahara_map.models.geojson import Ring

DEGENERATE_AREA_TOLERANCE = 1e-12
"""Absolute area (square degrees) at or below which a ring counts as degenerate."""


def shoelace_sum(ring: Ring) -> float:
    """Return twice the signed area of *ring*.

    Sums ``x_i * y_{i+1} - x_{i+1} * y_i`` over consecutive pairs
    ``i in [0, len - 2]``.  The closing edge is carried by the ring's
    repeated first position, so an unclosed ring is measured without it.
    """
    total = 0.0
    for (x0, y0, *_), (x1, y1, *_) in zip(ring, ring[1:]):
        total += x0 * y1 - x1 * y0
    return total


def signed_area(ring: Ring) -> float:
    """Signed area of *ring*; positive for counter-clockwise."""
    return shoelace_sum(ring) / 2


def is_degenerate(ring: Ring) -> bool:
    """Whether *ring* encloses (effectively) no area."""
    return math.isclose(signed_area(ring), 0.0, abs_tol=DEGENERATE_AREA_TOLERANCE)


def enforce_counter_clockwise(ring: Ring) -> Ring:
    """Return *ring* if it runs counter-clockwise (or is degenerate), else its reverse."""
    if is_degenerate(ring) or signed_area(ring) > 0:
        return ring
    return ring[::-1]


def enforce_clockwise(ring: Ring) -> Ring:
    """Return *ring* if it runs clockwise (or is degenerate), else its reverse."""
    if is_degenerate(ring) or signed_area(ring) < 0:
        return ring
    return ring[::-1]
