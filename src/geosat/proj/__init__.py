"""Geostationary projection and geodetic constants."""
