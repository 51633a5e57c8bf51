"""Readers that populate `geosat.image.image.Image` from data files."""
