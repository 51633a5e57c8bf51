import numpy as np

from geosat.image.data import ImageData
from geosat.image.image import Image
from geosat.proj.geos import Geos

# SEVIRI nominal CFAC/LFAC and full-disk sub-satellite pixel
SEVIRI_CFAC = 13642337
SEVIRI_RES = SEVIRI_CFAC * 2.0 ** -16
FULL_DISK_OFFSET = 1856


def make_image(pixels=None, slope=0.01, offset=-5.0, sublon=0.0, **kw):
    """Build a small valid Image around the sub-satellite point."""
    if pixels is None:
        pixels = np.arange(12, dtype=np.uint16).reshape(3, 4)
    data = ImageData(pixels, slope=slope, offset=offset)
    fields = dict(
        year=2004, month=1, day=19, hour=12, minute=0,
        data=data,
        column_res=SEVIRI_RES,
        line_res=SEVIRI_RES,
        projection=Geos(sublon),
        spacecraft_id=55,
        channel_id=9,
        column_offset=FULL_DISK_OFFSET,
        line_offset=FULL_DISK_OFFSET,
        x0=0,
        y0=0,
        name='TEST',
        short_name='TEST',
    )
    fields.update(kw)
    return Image(**fields)
