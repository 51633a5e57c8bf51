"""
image/geometry.py

Geometry derived from an `Image`: pixel footprint, SEVIRI sampling
distance, and conversions between pixel (column, line) indices, projected
view angles and geographic coordinates.

Public functions:
- `pixel_size(image)` -> km
- `seviri_dx(image)` / `seviri_dy(image)` -> sampling distance
- `pixel_to_projected(image, x, y)` / `projected_to_pixel(image, p)`
- `pixel_to_geo(image, xs, ys)` -> (lats, lons)
- `geo_to_pixel(image, lats, lons)` -> (xs, ys)

"""
import math
from typing import Tuple

import numpy as np

from geosat.errors import InvalidGeometryError
from geosat.proj.const import DEG_TO_RAD, EARTH_RADIUS
from geosat.proj.geos import MapPoint, ProjectedPoint


def pixel_size(image) -> float:
    """Ground size (km) of one pixel at the sub-satellite point."""
    orbit_radius = image.projection.orbit_radius
    # column_res is pixels per degree: one pixel spans 1/column_res degrees
    return (orbit_radius - EARTH_RADIUS) * math.tan((1.0 / image.column_res) * DEG_TO_RAD)


def seviri_dx(image) -> float:
    """Number of pixel samples spanning the Earth disk (SEVIRI DX)."""
    orbit_radius = image.projection.orbit_radius
    return float(round((2 * math.asin(EARTH_RADIUS / orbit_radius))
                       / math.atan(pixel_size(image) / (orbit_radius - EARTH_RADIUS))))


def seviri_dy(image) -> float:
    """Same as `seviri_dx`: pixels are assumed square."""
    return seviri_dx(image)


def pixel_to_projected(image, x, y) -> ProjectedPoint:
    """View angles (degrees) of the centre of pixel column `x`, line `y`."""
    return ProjectedPoint(
        (x + image.x0 - image.column_offset) / image.column_res,
        (y + image.y0 - image.line_offset) / image.line_res,
    )


def projected_to_pixel(image, p: ProjectedPoint) -> Tuple[int, int]:
    """Pixel (column, line) nearest to view angles `p`."""
    x = int(round(p[0] * image.column_res)) + image.column_offset - image.x0
    y = int(round(p[1] * image.line_res)) + image.line_offset - image.y0
    return x, y


def pixel_to_geo(image, xs, ys):
    """Convert pixel indices to geographic coordinates.

    Parameters:
    - image: `Image` providing offsets, resolution and projection
    - xs, ys: scalars or array-likes broadcastable to a common shape

    Returns (lats, lons). Scalars raise `OutOfDiskError` for pixels off the
    Earth disk; arrays get NaN in those positions instead.
    """
    xs_a = np.asarray(xs)
    ys_a = np.asarray(ys)
    if xs_a.shape == () and ys_a.shape == ():
        m = image.projection.projected_to_map(pixel_to_projected(image, float(xs_a), float(ys_a)))
        return m.lat, m.lon
    xs_a, ys_a = np.broadcast_arrays(xs_a, ys_a)

    lats = np.full(xs_a.shape, np.nan, dtype=float)
    lons = np.full(xs_a.shape, np.nan, dtype=float)
    it = np.nditer(xs_a, flags=['multi_index', 'refs_ok'])
    while not it.finished:
        i = it.multi_index
        p = pixel_to_projected(image, float(xs_a[i]), float(ys_a[i]))
        try:
            m = image.projection.projected_to_map(p)
        except InvalidGeometryError:
            it.iternext()
            continue
        lats[i] = m.lat
        lons[i] = m.lon
        it.iternext()
    return lats, lons


def geo_to_pixel(image, lats, lons):
    """Convert geographic coordinates to pixel indices (xs, ys).

    Returns integer column/line indices rounded to the nearest pixel. Scalars
    raise `OutOfDiskError` for points the satellite cannot see; arrays get
    -1 in both outputs for those points and for NaN coordinates.
    """
    lat_a = np.asarray(lats)
    lon_a = np.asarray(lons)
    if lat_a.shape == () and lon_a.shape == ():
        p = image.projection.map_to_projected(MapPoint(float(lat_a), float(lon_a)))
        return projected_to_pixel(image, p)
    lat_a, lon_a = np.broadcast_arrays(lat_a, lon_a)

    xs = np.full(lat_a.shape, -1, dtype=int)
    ys = np.full(lat_a.shape, -1, dtype=int)
    it = np.nditer(lat_a, flags=['multi_index', 'refs_ok'])
    while not it.finished:
        i = it.multi_index
        try:
            p = image.projection.map_to_projected(MapPoint(float(lat_a[i]), float(lon_a[i])))
        except InvalidGeometryError:
            it.iternext()
            continue
        xs[i], ys[i] = projected_to_pixel(image, p)
        it.iternext()
    return xs, ys
