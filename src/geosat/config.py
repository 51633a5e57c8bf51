# -*- coding: utf-8 -*-

"""
config.py

Central place for the fixed parameters used by the importers, the image
model and the command line tools.

Contents:
---------
1. SAF_DEFAULTS:
   - Full-disk reference used to turn SAF COFF/LOFF into crop offsets.
   - Fallback values for optional product attributes.

2. SPACECRAFT_IDS:
   - HRIT/LRIT spacecraft identifiers mapped to WMO satellite ids.

3. LOGGING:
   - Default level and record format for the command line tools.

Usage:
------
    from geosat.config import SAF_DEFAULTS, SPACECRAFT_IDS
"""
import logging

# ───────────────────────────────────────────────────────────────────────────────
# 1) SAF HDF5 PRODUCTS
# ───────────────────────────────────────────────────────────────────────────────
SAF_DEFAULTS = {
    # SEVIRI full disk is 3712x3712; the sub-satellite point sits at 1856
    'full_disk_offset': 1856,
    'unit': 'NUMERIC',
    'region_name': 'unknown',
    'filename_prefix': 'SAF',
}

# ───────────────────────────────────────────────────────────────────────────────
# 2) SPACECRAFT IDENTIFIERS (HRIT -> WMO)
# ───────────────────────────────────────────────────────────────────────────────
SPACECRAFT_IDS = {
    321: 55,    # MSG1 / Meteosat-8
    322: 56,    # MSG2 / Meteosat-9
    323: 57,    # MSG3 / Meteosat-10
    324: 70,    # MSG4 / Meteosat-11
}

# ───────────────────────────────────────────────────────────────────────────────
# 3) LOGGING
# ───────────────────────────────────────────────────────────────────────────────
LOGGING = {
    'level': logging.WARNING,
    'verbose_level': logging.DEBUG,
    'format': '%(asctime)s [%(levelname)s] %(message)s',
}
