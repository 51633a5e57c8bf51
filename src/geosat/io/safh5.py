"""SAF HDF5 importer.

Reads Nowcasting SAF products stored as HDF5: the root group carries the
product metadata (acquisition time, projection, channel, sampling) and
every dataset with `CLASS == "IMAGE"` is one image of raw samples with its
own calibration.

A filename may name a single dataset with `path:dataset`.
"""
import logging
import os
import re
from typing import Iterator, Mapping, Optional, Tuple

import h5py
import numpy as np

from geosat.config import SAF_DEFAULTS
from geosat.errors import MalformedInputError
from geosat.image.channels import ChannelInfo, check_calibration, lookup_channel
from geosat.image.data import ImageData, missing_value
from geosat.image.image import Image, parse_acquisition_time, spacecraft_id_from_hrit
from geosat.io.h5utils import read_float_attribute, read_int_attribute, read_string_attribute
from geosat.proj.const import ORBIT_RADIUS
from geosat.proj.geos import Geos

logger = logging.getLogger(__name__)

# SAF samples are unsigned integers of these sizes (bytes)
_SAMPLE_TYPES = {1: np.uint8, 2: np.uint16, 4: np.uint32}

_PROJ_RE = re.compile(r'^GEOS[<(]\s*([+-]?\d+(?:\.\d*)?)\s*[>)]')


def split_filename(filename: str) -> Tuple[str, Optional[str]]:
    """Split `path[:dataset]` into (path, dataset or None).

    Only a colon after the last path separator starts a dataset name.
    """
    pos = filename.rfind('/')
    pos = filename.find(':', max(pos, 0))
    if pos == -1:
        return filename, None
    return filename[:pos], filename[pos + 1:] or None


def is_safh5(filename: str) -> bool:
    """True if `filename` (optionally `path:dataset`) is an existing HDF5 file."""
    path, _ = split_filename(filename)
    if not os.path.exists(path):
        return False
    try:
        return bool(h5py.is_hdf5(path))
    except OSError:
        logger.debug('cannot probe %s as HDF5', path, exc_info=True)
        return False


def parse_projection_name(proj: str) -> float:
    """Sub-satellite longitude from a SAF projection name such as `GEOS<+000.0>`."""
    m = _PROJ_RE.match(proj)
    if m is None:
        raise MalformedInputError(f"cannot read subsatellite longitude from projection name {proj!r}")
    return float(m.group(1))


def _acquire_image(dataset) -> ImageData:
    cols = read_int_attribute(dataset, 'N_COLS')
    lines = read_int_attribute(dataset, 'N_LINES')
    slope = read_float_attribute(dataset, 'SCALING_FACTOR')
    offset = read_float_attribute(dataset, 'OFFSET')

    if dataset.size != cols * lines:
        raise MalformedInputError(
            f"Image declares {cols * lines} samples but has {dataset.size} instead")

    itemsize = dataset.dtype.itemsize
    sample_type = _SAMPLE_TYPES.get(itemsize)
    if sample_type is None or dataset.dtype.kind not in 'iu':
        raise MalformedInputError(
            f"Unsupported sample data type {dataset.dtype} in {dataset.name}")

    pixels = np.asarray(dataset[()]).astype(sample_type, copy=False).reshape(lines, cols)
    # SAF images do not have missing values: use the sentinel no sample can reach
    return ImageData(pixels, slope=slope, offset=offset,
                     missing=missing_value(sample_type), scales_to_int=True)


def import_safh5(group, name: str, channels: Optional[Mapping[str, ChannelInfo]] = None) -> Image:
    """Build an `Image` from dataset `name` of the SAF product in `group`.

    Parameters:
    - group: h5py group holding the product attributes (usually the root)
    - name: dataset name of the image
    - channels: optional reference table used for the calibration check

    Raises `MalformedInputError` for missing or unparsable metadata.
    """
    logger.info('Reading SAFH5 group %s', name)
    dataset = group[name]

    product_name = read_string_attribute(group, 'PRODUCT_NAME').rstrip('_')
    year, month, day, hour, minute = parse_acquisition_time(
        read_string_attribute(group, 'IMAGE_ACQUISITION_TIME'))
    sublon = parse_projection_name(read_string_attribute(group, 'PROJECTION_NAME'))

    info = lookup_channel(channels, name)
    channel_id = read_int_attribute(group, 'SPECTRAL_CHANNEL_ID')
    if info is not None:
        channel_id = info.channel_id

    # COFF/LOFF count from the top-left of the cropped area to the
    # sub-satellite point
    full = SAF_DEFAULTS['full_disk_offset']
    x0 = full - read_int_attribute(group, 'COFF') + 1
    y0 = full - read_int_attribute(group, 'LOFF') + 1

    region_name = read_string_attribute(group, 'REGION_NAME', default=None) or SAF_DEFAULTS['region_name']
    default_filename = (f"{SAF_DEFAULTS['filename_prefix']}_{region_name}_{name}_"
                        f"{year:04d}{month:02d}{day:02d}_{hour:02d}{minute:02d}")

    img = Image(
        year=year, month=month, day=day, hour=hour, minute=minute,
        data=_acquire_image(dataset),
        column_res=read_int_attribute(group, 'CFAC') * 2.0 ** -16,
        line_res=read_int_attribute(group, 'LFAC') * 2.0 ** -16,
        projection=Geos(sublon, ORBIT_RADIUS),
        spacecraft_id=spacecraft_id_from_hrit(read_int_attribute(group, 'GP_SC_ID')),
        channel_id=channel_id,
        column_offset=full,
        line_offset=full,
        x0=x0,
        y0=y0,
        name=product_name,
        short_name=name,
        unit=SAF_DEFAULTS['unit'],
        default_filename=default_filename,
    )

    # slope, offset and bpp differing from the usual ones make the
    # conversion back to raw values potentially irreversible
    check_calibration(img, info)
    return img


def _is_image(obj) -> bool:
    return isinstance(obj, h5py.Dataset) and read_string_attribute(obj, 'CLASS', default='') == 'IMAGE'


def read_safh5(filename: str, channels: Optional[Mapping[str, ChannelInfo]] = None) -> Iterator[Image]:
    """Yield the images in a SAF HDF5 file.

    With `path:dataset` only that dataset is read and it must be an image.
    """
    path, image_name = split_filename(filename)
    logger.info('Reading SAFH5 file %s', path)
    with h5py.File(path, 'r') as f:
        group = f['/']
        if image_name is None:
            for name in group:
                if not _is_image(group[name]):
                    logger.debug('skipping non-image object %s', name)
                    continue
                yield import_safh5(group, name, channels)
        else:
            if image_name not in group or not _is_image(group[image_name]):
                raise MalformedInputError(f"dataset name {image_name} is not an image")
            yield import_safh5(group, image_name, channels)
