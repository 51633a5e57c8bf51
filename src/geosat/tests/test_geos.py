import dataclasses
import math

import numpy as np
import pytest

from geosat.errors import InvalidGeometryError, OutOfDiskError
from geosat.proj import const
from geosat.proj.geos import Geos, MapPoint, ProjectedPoint


def test_ellipsoid_terms_consistent():
    assert abs(const.EARTH_1E2 - 0.993243) < 1e-6
    assert abs(const.EARTH_E2 - 0.00675701) < 1e-6
    assert abs(const.EARTH_IE2 - 1.006803) < 1e-6
    assert abs(const.EARTH_1E2 * const.EARTH_IE2 - 1.0) < 1e-15


def test_radius_term_computed_from_constants():
    g = Geos(0.0)
    expected = const.ORBIT_RADIUS ** 2 - const.EARTH_RADIUS ** 2
    assert g.radius_term == pytest.approx(expected, rel=1e-15)
    # 42164^2 - 6378.169^2 = 1737121856.21
    assert abs(g.radius_term - 1737121856.21) < 0.01
    assert Geos(0.0, orbit_radius=42000.0).radius_term < g.radius_term


def test_subsatellite_point_is_origin():
    for sublon in (0.0, 9.5, -75.0):
        g = Geos(sublon)
        p = g.map_to_projected(MapPoint(0.0, sublon))
        assert abs(p.x) < 1e-12
        assert abs(p.y) < 1e-12
        m = g.projected_to_map(ProjectedPoint(0.0, 0.0))
        assert abs(m.lat) < 1e-12
        assert abs(m.lon - sublon) < 1e-12


def test_axis_orientation():
    g = Geos(0.0)
    # north -> negative y, east -> positive x
    assert g.map_to_projected(MapPoint(45.0, 0.0)).y < 0
    assert g.map_to_projected(MapPoint(-45.0, 0.0)).y > 0
    assert g.map_to_projected(MapPoint(0.0, 30.0)).x > 0
    assert g.map_to_projected(MapPoint(0.0, -30.0)).x < 0


@pytest.mark.parametrize('sublon', [0.0, 9.5, -75.2])
def test_round_trip_inside_disk(sublon):
    g = Geos(sublon)
    for lat in np.arange(-60.0, 61.0, 20.0):
        for dlon in np.arange(-60.0, 61.0, 20.0):
            m = MapPoint(float(lat), float(sublon + dlon))
            back = g.projected_to_map(g.map_to_projected(m))
            assert abs(back.lat - m.lat) < 1e-9
            assert abs(back.lon - m.lon) < 1e-9


def test_round_trip_from_projected():
    g = Geos(0.0)
    for x, y in [(0.0, 0.0), (3.0, -2.0), (-7.5, 1.0), (1.0, 8.0)]:
        p = ProjectedPoint(x, y)
        back = g.map_to_projected(g.projected_to_map(p))
        assert abs(back.x - x) < 1e-9
        assert abs(back.y - y) < 1e-9


def test_map_to_projected_rejects_hidden_points():
    g = Geos(0.0)
    with pytest.raises(OutOfDiskError):
        g.map_to_projected(MapPoint(0.0, 180.0))
    # beyond the limb (~81.3 degrees from the sub-satellite point)
    with pytest.raises(OutOfDiskError):
        g.map_to_projected(MapPoint(0.0, 85.0))
    with pytest.raises(OutOfDiskError):
        g.map_to_projected(MapPoint(88.0, 0.0))
    # still visible
    p = g.map_to_projected(MapPoint(0.0, 80.0))
    assert math.isfinite(p.x)


def test_projected_to_map_rejects_off_disk():
    g = Geos(0.0)
    for p in [ProjectedPoint(90.0, 0.0), ProjectedPoint(-120.0, 0.0), ProjectedPoint(0.0, -95.0),
              ProjectedPoint(10.0, 0.0), ProjectedPoint(7.0, 7.0)]:
        with pytest.raises(OutOfDiskError):
            g.projected_to_map(p)


def test_out_of_disk_is_invalid_geometry():
    with pytest.raises(InvalidGeometryError):
        Geos(0.0).projected_to_map(ProjectedPoint(45.0, 0.0))


def test_orbit_inside_earth_rejected():
    with pytest.raises(InvalidGeometryError):
        Geos(0.0, orbit_radius=6000.0)
    with pytest.raises(InvalidGeometryError):
        Geos(0.0, orbit_radius=const.EARTH_RADIUS)


def test_geos_is_immutable_and_formats():
    g = Geos(9.5)
    with pytest.raises(dataclasses.FrozenInstanceError):
        g.sublon = 0.0
    assert str(g) == 'GEOS(sublon: 9.5, orbitRadius: 42164.0)'


def test_forward_projection_matches_proj():
    from pyproj import Transformer

    g = Geos(9.5)
    crs = g.crs()
    t = Transformer.from_crs(crs.geodetic_crs, crs, always_xy=True)
    height = (g.orbit_radius - const.EARTH_RADIUS) * 1000.0
    for lat, lon in [(45.0, 9.5), (10.0, 30.0), (-35.0, -10.0), (60.0, 40.0)]:
        p = g.map_to_projected(MapPoint(lat, lon))
        xm, ym = t.transform(lon, lat)
        assert math.degrees(xm / height) == pytest.approx(p.x, abs=1e-6)
        assert math.degrees(-ym / height) == pytest.approx(p.y, abs=1e-6)


@pytest.mark.parametrize('m', [
    MapPoint(100.0, 0.0),
    MapPoint(-90.5, 0.0),
    MapPoint(math.nan, 0.0),
    MapPoint(0.0, math.nan),
    MapPoint(math.inf, 0.0),
    MapPoint(0.0, -math.inf),
])
def test_map_to_projected_rejects_invalid_coordinates(m):
    with pytest.raises(InvalidGeometryError):
        Geos(0.0).map_to_projected(m)


@pytest.mark.parametrize('p', [
    ProjectedPoint(math.nan, 0.0),
    ProjectedPoint(0.0, math.nan),
    ProjectedPoint(math.inf, 0.0),
    ProjectedPoint(0.0, -math.inf),
])
def test_projected_to_map_rejects_non_finite_angles(p):
    with pytest.raises(InvalidGeometryError):
        Geos(0.0).projected_to_map(p)
