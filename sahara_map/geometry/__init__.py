"""Pure geometry for the region pipeline.

- winding: signed area and ring orientation
- reproject: spherical-Mercator detection and conversion to degrees
- mask: inverse world mask with the region as holes
- containment: ray-casting point-in-region
- bounds: enclosing rectangle and margin expansion

Everything here is synchronous and side-effect free; inputs are never mutated.
"""

from sahara_map.geometry.bounds import compute_bounds, expand
from sahara_map.geometry.containment import feature_at, is_in_region, point_in_ring
from sahara_map.geometry.mask import WORLD_RING, build_inverse_mask, build_mask_collection
from sahara_map.geometry.reproject import (
    needs_reprojection,
    normalize_coordinates,
    reproject,
    sample_position,
    to_geographic,
)
from sahara_map.geometry.winding import (
    enforce_clockwise,
    enforce_counter_clockwise,
    is_degenerate,
    shoelace_sum,
    signed_area,
)

__all__ = [
    "WORLD_RING",
    "build_inverse_mask",
    "build_mask_collection",
    "compute_bounds",
    "enforce_clockwise",
    "enforce_counter_clockwise",
    "expand",
    "feature_at",
    "is_degenerate",
    "is_in_region",
    "needs_reprojection",
    "normalize_coordinates",
    "point_in_ring",
    "reproject",
    "sample_position",
    "shoelace_sum",
    "signed_area",
    "to_geographic",
]
