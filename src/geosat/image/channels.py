"""
image/channels.py

Reference calibration for known channels and the consistency check run by
importers. The reference table is passed in by the caller; this module keeps
no global registry.
"""
import logging
from dataclasses import dataclass
from typing import List, Mapping, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChannelInfo:
    """Usual calibration of a product channel."""
    name: str
    channel_id: int
    slope: float
    offset: float
    bpp: int


def lookup_channel(channels: Optional[Mapping[str, ChannelInfo]], name: str) -> Optional[ChannelInfo]:
    """Return the reference for `name`, or None when unknown or no table is given."""
    if not channels:
        return None
    return channels.get(name)


def check_calibration(image, info: Optional[ChannelInfo]) -> List[str]:
    """Compare the calibration of `image` with the reference `info`.

    Differences are not errors: each one is logged as a warning (the
    conversion back to raw values may not be reversible) and the messages
    are returned.
    """
    name = image.short_name or image.name
    if info is None:
        msgs = [f"unknown channel informations for product {name}"]
    else:
        data = image.data
        msgs = []
        if info.slope != data.slope:
            msgs.append(f"slope for image ({data.slope}) is different from the usual one ({info.slope})")
        if info.offset != data.offset:
            msgs.append(f"offset for image ({data.offset}) is different from the usual one ({info.offset})")
        if info.bpp < data.bpp:
            msgs.append(f"bpp for image ({data.bpp}) is more than the usual one ({info.bpp})")
    for msg in msgs:
        logger.warning('%s', msg)
    return msgs
