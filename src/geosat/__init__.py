"""
geosat - geostationary satellite image decoding.

This package provides:
- the normalized geostationary (full-disk) projection (`geosat.proj`)
- calibrated pixel buffers and image metadata (`geosat.image`)
- an importer for SAF HDF5 products (`geosat.io`)
- a text dumper / command line tool (`geosat.dump`)
"""

__version__ = "0.1.0"
