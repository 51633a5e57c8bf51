"""
image/image.py

Image metadata: acquisition time, spacecraft and channel identity, the
geostationary view and its pixel sampling, plus the calibrated buffer.

An `Image` is built in one shot by an importer and validated on
construction; it is immutable afterwards.
"""
import logging
import re
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Tuple

from geosat.config import SPACECRAFT_IDS
from geosat.errors import MalformedInputError
from geosat.image.data import ImageData
from geosat.proj.geos import Geos

logger = logging.getLogger(__name__)

EPOCH_2000 = datetime(2000, 1, 1, tzinfo=timezone.utc)

_ACQ_TIME_RE = re.compile(r'^\s*(\d{4})(\d{2})(\d{2})(\d{2})(\d{2})')


def parse_acquisition_time(text: str) -> Tuple[int, int, int, int, int]:
    """Split a `YYYYMMDDhhmm` timestamp into (year, month, day, hour, minute).

    Trailing characters (seconds, zone letters) are ignored. Raises
    `MalformedInputError` if the text does not start with a valid date.
    """
    if isinstance(text, bytes):
        text = text.decode('ascii', errors='replace')
    m = _ACQ_TIME_RE.match(str(text))
    if m is None:
        raise MalformedInputError(f"Unable to parse datetime {text!r}")
    fields = tuple(int(g) for g in m.groups())
    try:
        datetime(*fields)
    except ValueError as exc:
        raise MalformedInputError(f"Unable to parse datetime {text!r}: {exc}") from exc
    return fields


def spacecraft_id_from_hrit(hrit_id: int) -> int:
    """Map an HRIT spacecraft id to its WMO id; unknown ids pass through."""
    hrit_id = int(hrit_id)
    res = SPACECRAFT_IDS.get(hrit_id)
    if res is None:
        logger.debug('no WMO id known for HRIT spacecraft %d', hrit_id)
        return hrit_id
    return res


@dataclass(frozen=True)
class Image:
    """One decoded image.

    `column_res`/`line_res` are the scaled resolution factors (CFAC * 2^-16,
    LFAC * 2^-16): pixels per degree of view angle. `column_offset` and
    `line_offset` locate the sub-satellite point in full-disk pixels, and
    `x0`/`y0` locate this (possibly cropped) image inside the full disk.
    """
    year: int
    month: int
    day: int
    hour: int
    minute: int
    data: ImageData
    column_res: float
    line_res: float
    projection: Geos = field(default_factory=Geos)
    spacecraft_id: int = 0
    channel_id: int = 0
    column_offset: int = 0
    line_offset: int = 0
    x0: int = 0
    y0: int = 0
    name: str = ''
    short_name: str = ''
    unit: str = ''
    default_filename: str = ''

    def __post_init__(self):
        try:
            datetime(self.year, self.month, self.day, self.hour, self.minute)
        except (TypeError, ValueError) as exc:
            raise MalformedInputError(
                f"invalid acquisition time {self.year}-{self.month}-{self.day} "
                f"{self.hour}:{self.minute}: {exc}") from exc
        if not isinstance(self.data, ImageData):
            raise MalformedInputError(f"image data must be ImageData, not {type(self.data).__name__}")
        if not isinstance(self.projection, Geos):
            raise MalformedInputError(f"projection must be Geos, not {type(self.projection).__name__}")
        for name in ('column_res', 'line_res'):
            value = getattr(self, name)
            if not value > 0 or value == float('inf'):
                raise MalformedInputError(f"{name} must be strictly positive, got {value!r}")
        # the image origin must be a valid view angle
        ox = (self.x0 - self.column_offset) / self.column_res
        oy = (self.y0 - self.line_offset) / self.line_res
        if abs(ox) >= 90.0 or abs(oy) >= 90.0:
            raise MalformedInputError(
                f"pixel offsets put the image origin at ({ox}, {oy}) degrees")

    @property
    def acquisition_time(self) -> datetime:
        """Acquisition time as an aware UTC datetime."""
        return datetime(self.year, self.month, self.day, self.hour, self.minute, tzinfo=timezone.utc)

    def datetime_str(self) -> str:
        """`YYYY-MM-DD HH:MM`, zero padded."""
        return (f"{self.year:04d}-{self.month:02d}-{self.day:02d} "
                f"{self.hour:02d}:{self.minute:02d}")

    def seconds_since_2000(self) -> int:
        """Seconds from 2000-01-01 00:00:00 UTC to the acquisition time."""
        delta = self.acquisition_time - EPOCH_2000
        return delta.days * 86400 + delta.seconds

    def crop(self, x: int, y: int, width: int, height: int) -> 'Image':
        """Return the sub-image at columns [x, x+width), lines [y, y+height).

        The crop offsets are shifted so geolocation of the remaining pixels
        is unchanged.
        """
        return replace(self, data=self.data.crop(x, y, width, height),
                       x0=self.x0 + x, y0=self.y0 + y)

    def __str__(self):
        return f"{self.name or 'image'} {self.datetime_str()} {self.projection}"
