"""
proj/geos.py

Normalized geostationary projection (full-disk view), after the CGMS
LRIT/HRIT Global Specification, section 4.4.

Projected coordinates are view angles in degrees from the sub-satellite
point: `x` grows eastwards, `y` grows southwards (so northern latitudes have
negative `y`, matching image lines counted from the top).

Public API:
- `MapPoint(lat, lon)` / `ProjectedPoint(x, y)` value types
- `Geos(sublon, orbit_radius)` with `map_to_projected` and `projected_to_map`

"""
import math
from dataclasses import dataclass
from typing import NamedTuple

from geosat.errors import InvalidGeometryError, OutOfDiskError
from geosat.proj.const import (
    DEG_TO_RAD,
    EARTH_1E2,
    EARTH_E2,
    EARTH_IE2,
    EARTH_RADIUS,
    EARTH_RPOL,
    ORBIT_RADIUS,
    RAD_TO_DEG,
)


class MapPoint(NamedTuple):
    """Geographic point, degrees."""
    lat: float
    lon: float


class ProjectedPoint(NamedTuple):
    """View angles from the sub-satellite point, degrees."""
    x: float
    y: float


@dataclass(frozen=True)
class Geos:
    """Geostationary view from a satellite above `sublon` (degrees east).

    Instances are immutable and can be shared between images taken by the
    same spacecraft.
    """
    sublon: float = 0.0
    orbit_radius: float = ORBIT_RADIUS

    def __post_init__(self):
        if not self.orbit_radius > EARTH_RADIUS:
            raise InvalidGeometryError(
                f"orbit radius {self.orbit_radius} km must exceed the Earth equatorial radius {EARTH_RADIUS} km")

    @property
    def radius_term(self) -> float:
        """orbit_radius^2 - R_eq^2, the constant term of the line-of-sight quadratic."""
        return self.orbit_radius ** 2 - EARTH_RADIUS ** 2

    def map_to_projected(self, m: MapPoint) -> ProjectedPoint:
        """Project a geographic point to satellite view angles.

        Raises `OutOfDiskError` if the point cannot be seen from the satellite
        and `InvalidGeometryError` for non-finite coordinates or a latitude
        outside [-90, 90].
        """
        if not (math.isfinite(m[0]) and math.isfinite(m[1])):
            raise InvalidGeometryError(f"{m} has non-finite coordinates")
        if abs(m[0]) > 90.0:
            raise InvalidGeometryError(f"{m} latitude outside [-90, 90]")
        lat = m[0] * DEG_TO_RAD
        lon = (m[1] - self.sublon) * DEG_TO_RAD

        # geodetic -> geocentric latitude, then distance to the surface
        c_lat = math.atan(EARTH_1E2 * math.tan(lat))
        rl = EARTH_RPOL / math.sqrt(1.0 - EARTH_E2 * math.cos(c_lat) ** 2)

        px = rl * math.cos(c_lat) * math.cos(lon)
        r1 = self.orbit_radius - px
        r2 = -rl * math.cos(c_lat) * math.sin(lon)
        r3 = rl * math.sin(c_lat)
        rn = math.sqrt(r1 * r1 + r2 * r2 + r3 * r3)

        # The surface normal faces the satellite only when R * px > R_eq^2
        if r1 <= 0.0 or self.orbit_radius * px <= EARTH_RADIUS ** 2:
            raise OutOfDiskError(f"{m} is not visible from {self}")

        return ProjectedPoint(
            math.atan(-r2 / r1) * RAD_TO_DEG,
            math.asin(-r3 / rn) * RAD_TO_DEG,
        )

    def projected_to_map(self, p: ProjectedPoint) -> MapPoint:
        """Find the geographic point seen at view angles `p`.

        Raises `OutOfDiskError` if the line of sight misses the Earth and
        `InvalidGeometryError` for non-finite angles.
        """
        if not (math.isfinite(p[0]) and math.isfinite(p[1])):
            raise InvalidGeometryError(f"{p} has non-finite view angles")
        if abs(p[0]) >= 90.0 or abs(p[1]) >= 90.0:
            raise OutOfDiskError(f"{p} points away from the Earth")
        x = p[0] * DEG_TO_RAD
        y = p[1] * DEG_TO_RAD

        cos_x, cos_y = math.cos(x), math.cos(y)
        sin_x, sin_y = math.sin(x), math.sin(y)

        a = cos_y ** 2 + EARTH_IE2 * sin_y ** 2
        b = self.orbit_radius * cos_x * cos_y
        disc = b ** 2 - a * self.radius_term
        if disc < 0.0:
            raise OutOfDiskError(f"{p} is outside the visible Earth disk")
        sd = math.sqrt(disc)
        # nearest of the two intersections with the ellipsoid
        sn = (b - sd) / a

        s1 = self.orbit_radius - sn * cos_x * cos_y
        s2 = sn * sin_x * cos_y
        s3 = -sn * sin_y
        sxy = math.sqrt(s1 * s1 + s2 * s2)

        return MapPoint(
            math.atan(EARTH_IE2 * (s3 / sxy)) * RAD_TO_DEG,
            math.atan(s2 / s1) * RAD_TO_DEG + self.sublon,
        )

    def proj4(self) -> str:
        """Equivalent PROJ definition (metres, Meteosat scan geometry)."""
        height = (self.orbit_radius - EARTH_RADIUS) * 1000.0
        return (f"+proj=geos +h={height!r} +a={EARTH_RADIUS * 1000.0!r} +b={EARTH_RPOL * 1000.0!r} "
                f"+lon_0={self.sublon!r} +sweep=y +units=m +no_defs")

    def crs(self):
        """Return this view as a `pyproj.CRS`."""
        from pyproj import CRS
        return CRS.from_proj4(self.proj4())

    def __str__(self):
        return f"GEOS(sublon: {self.sublon}, orbitRadius: {self.orbit_radius})"
