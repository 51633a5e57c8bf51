"""
proj/const.py

Geodetic constants for the normalized geostationary projection, as defined
in the CGMS LRIT/HRIT Global Specification (CGMS 03, section 4.4).

All distances are in kilometres. The ellipsoid-derived terms are computed
from the two radii so the forward and inverse transforms stay consistent.
"""
import math

# ───────────────────────────────────────────────────────────────────────────────
# Earth ellipsoid (km)
# ───────────────────────────────────────────────────────────────────────────────
EARTH_RADIUS = 6378.169         # equatorial radius
EARTH_RPOL = 6356.5838          # polar radius

EARTH_1E2 = (EARTH_RPOL / EARTH_RADIUS) ** 2    # 1 - e^2   ~ 0.993243
EARTH_E2 = 1.0 - EARTH_1E2                      # e^2       ~ 0.00675701
EARTH_IE2 = 1.0 / EARTH_1E2                     # 1/(1-e^2) ~ 1.006803

# ───────────────────────────────────────────────────────────────────────────────
# Geostationary orbit
# ───────────────────────────────────────────────────────────────────────────────
ORBIT_RADIUS = 42164.0          # distance from the Earth centre to the satellite

PI = math.pi
DEG_TO_RAD = PI / 180.0
RAD_TO_DEG = 180.0 / PI
