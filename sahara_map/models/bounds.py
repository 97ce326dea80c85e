"""Geographic bounds rectangle.

Used both for the pan restriction (``setMaxBounds``) and the fit-view
target.  No antimeridian wraparound: west must not exceed east.
"""

from __future__ import annotations

from dataclasses import dataclass

from sahara_map.core.exceptions import BoundsError


@dataclass(frozen=True, slots=True)
class Bounds:
    """A west/south/east/north rectangle in degrees.

    Values are not clamped to the valid longitude/latitude range; an
    expanded rectangle may exceed ±180/±90 and the map shell clamps as it
    sees fit.

    Raises:
        BoundsError: If ``west > east`` or ``south > north``.
    """

    west: float
    south: float
    east: float
    north: float

    def __post_init__(self) -> None:
        if self.west > self.east:
            msg = f"Bounds west {self.west} exceeds east {self.east}"
            raise BoundsError(msg)
        if self.south > self.north:
            msg = f"Bounds south {self.south} exceeds north {self.north}"
            raise BoundsError(msg)

    @property
    def center(self) -> tuple[float, float]:
        """Centre of the rectangle as ``(lon, lat)``."""
        return ((self.west + self.east) / 2, (self.south + self.north) / 2)

    def to_list(self) -> list[float]:
        """``[west, south, east, north]`` (GeoJSON bbox order)."""
        return [self.west, self.south, self.east, self.north]

    def to_lnglat_pairs(self) -> list[list[float]]:
        """``[[west, south], [east, north]]`` as MapLibre ``LngLatBoundsLike``."""
        return [[self.west, self.south], [self.east, self.north]]
