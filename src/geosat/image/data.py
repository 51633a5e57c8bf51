"""
image/data.py

Calibrated pixel buffer: raw integer samples plus the linear calibration
that turns them into physical values.

Samples are kept in their original dtype and converted on demand, so large
grids keep the memory footprint and precision of the source product.

Public API:
- `ImageData(pixels, slope, offset, missing, scales_to_int)`
- `missing_value(dtype)` : default "no data" sentinel for a sample dtype
- `compute_bpp(samples)` : bits needed for the largest sample
"""
import logging
import math
from typing import Tuple

import numpy as np

from geosat.errors import MalformedInputError, OutOfRangeError

logger = logging.getLogger(__name__)


def missing_value(dtype):
    """Return the sentinel used for missing samples of `dtype`.

    NaN for floating point types, the minimum for signed integers and the
    maximum for unsigned integers.
    """
    dtype = np.dtype(dtype)
    if dtype.kind == 'f':
        return dtype.type(np.nan)
    info = np.iinfo(dtype)
    if dtype.kind == 'i':
        return dtype.type(info.min)
    return dtype.type(info.max)


def compute_bpp(samples) -> int:
    """Bits per pixel needed to store the largest value in `samples`.

    `ceil(log2(max + 1))`; 255 -> 8, 256 -> 9. Empty or non-positive input
    gives 0.
    """
    arr = np.asarray(samples)
    if arr.size == 0:
        return 0
    if arr.dtype.kind == 'f':
        finite = arr[np.isfinite(arr)]
        mx = finite.max() if finite.size else 0
    else:
        mx = arr.max()
    # python int: max + 1 must not wrap around in the sample dtype
    mx = int(mx)
    if mx <= 0:
        return 0
    return int(math.ceil(math.log2(mx + 1)))


class ImageData:
    """2-D buffer of raw samples with slope/offset calibration.

    Parameters:
    - pixels: 2-D array-like of shape (lines, columns), row-major
    - slope, offset: physical = raw * slope + offset
    - missing: raw value meaning "no data" (defaults to `missing_value`)
    - scales_to_int: calibrated values belong to an integer domain

    The pixel array is copied and made read-only; `bpp` is derived from it.
    """

    def __init__(self, pixels, slope: float = 1.0, offset: float = 0.0,
                 missing=None, scales_to_int: bool = False):
        arr = np.array(pixels, order='C')
        if arr.ndim != 2:
            raise MalformedInputError(f"pixel buffer must be 2-D, got shape {arr.shape}")
        if not slope or not math.isfinite(slope):
            raise MalformedInputError(f"invalid calibration slope {slope!r}")
        arr.setflags(write=False)
        self._pixels = arr
        self._slope = float(slope)
        self._offset = float(offset)
        self._missing = missing_value(arr.dtype) if missing is None else arr.dtype.type(missing)
        self._scales_to_int = bool(scales_to_int)
        self._bpp = compute_bpp(arr)
        logger.debug('ImageData %dx%d dtype=%s bpp=%d', self.columns, self.lines, arr.dtype, self.bpp)

    @property
    def columns(self) -> int:
        return self._pixels.shape[1]

    @property
    def lines(self) -> int:
        return self._pixels.shape[0]

    @property
    def dtype(self):
        return self._pixels.dtype

    @property
    def pixels(self) -> np.ndarray:
        """Read-only view of the raw samples."""
        return self._pixels

    @property
    def slope(self) -> float:
        return self._slope

    @property
    def offset(self) -> float:
        return self._offset

    @property
    def missing(self):
        """Raw value meaning "no data"."""
        return self._missing

    @property
    def scales_to_int(self) -> bool:
        return self._scales_to_int

    @property
    def bpp(self) -> int:
        """Bits per pixel of the largest sample, fixed at construction."""
        return self._bpp

    def _check(self, x: int, y: int) -> None:
        if not (0 <= x < self.columns and 0 <= y < self.lines):
            raise OutOfRangeError(
                f"pixel ({x}, {y}) outside {self.columns}x{self.lines} image")

    def is_missing(self, raw) -> bool:
        if self._pixels.dtype.kind == 'f' and math.isnan(self.missing):
            return math.isnan(raw)
        return raw == self.missing

    def unscaled(self, x: int, y: int):
        """Raw sample at column `x`, line `y`."""
        self._check(x, y)
        return self._pixels[y, x].item()

    def scaled(self, x: int, y: int) -> float:
        """Calibrated value at column `x`, line `y`; NaN for missing samples."""
        raw = self.unscaled(x, y)
        if self.is_missing(raw):
            return math.nan
        return raw * self.slope + self.offset

    def unscale(self, value: float):
        """Raw sample that calibrates to `value` (NaN maps to `missing`)."""
        if math.isnan(value):
            return self.missing.item()
        return int(round((value - self.offset) / self.slope))

    def all_unscaled(self) -> np.ndarray:
        """New (lines, columns) array with every raw sample."""
        return self._pixels.copy()

    def all_scaled(self, dtype=np.float64) -> np.ndarray:
        """New (lines, columns) array with every calibrated value."""
        res = self._pixels.astype(dtype) * self.slope + self.offset
        if self._pixels.dtype.kind == 'f' and np.isnan(self.missing):
            mask = np.isnan(self._pixels)
        else:
            mask = self._pixels == self.missing
        res[mask] = np.nan
        return res

    def decimal_scale(self) -> int:
        """Decimal digits of precision implied by `slope` (0.01 -> 2, 0.003 -> 3)."""
        res = -math.ceil(math.log10(abs(self.slope)))
        if 10.0 ** -res == abs(self.slope):
            return res
        return res + 1

    def crop(self, x: int, y: int, width: int, height: int) -> 'ImageData':
        """New buffer over columns [x, x+width) and lines [y, y+height)."""
        if width <= 0 or height <= 0:
            raise OutOfRangeError(f"invalid crop size {width}x{height}")
        self._check(x, y)
        self._check(x + width - 1, y + height - 1)
        return ImageData(self._pixels[y:y + height, x:x + width],
                         slope=self.slope, offset=self.offset,
                         missing=self.missing, scales_to_int=self.scales_to_int)

    @property
    def shape(self) -> Tuple[int, int]:
        return self._pixels.shape

    def __repr__(self):
        return (f"ImageData({self.columns}x{self.lines}, {self.dtype}, {self.bpp}bpp, "
                f"*{self.slope}+{self.offset})")
