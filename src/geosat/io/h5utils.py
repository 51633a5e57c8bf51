"""HDF5 attribute helpers shared by the HDF5-based importers.

h5py returns attributes as numpy scalars, 1-element arrays, `bytes` or
`str` depending on how the file was written; these helpers normalise them
and turn a missing attribute into `MalformedInputError`.
"""
from typing import Any

import numpy as np

from geosat.errors import MalformedInputError

_NO_DEFAULT = object()


def _read_attribute(obj, name: str, default: Any = _NO_DEFAULT):
    try:
        value = obj.attrs[name]
    except KeyError:
        if default is not _NO_DEFAULT:
            return default
        raise MalformedInputError(f"attribute {name!r} not found in {obj.name}") from None
    arr = np.asarray(value)
    if arr.ndim > 0:
        if arr.size == 0:
            raise MalformedInputError(f"attribute {name!r} in {obj.name} is empty")
        value = arr.reshape(-1)[0]
    return value


def read_int_attribute(obj, name: str, default: Any = _NO_DEFAULT) -> int:
    value = _read_attribute(obj, name, default)
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise MalformedInputError(f"attribute {name!r} in {obj.name} is not an integer: {value!r}") from exc


def read_float_attribute(obj, name: str, default: Any = _NO_DEFAULT) -> float:
    value = _read_attribute(obj, name, default)
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise MalformedInputError(f"attribute {name!r} in {obj.name} is not a number: {value!r}") from exc


def read_string_attribute(obj, name: str, default: Any = _NO_DEFAULT) -> str:
    """String attribute with trailing NULs and blanks removed."""
    value = _read_attribute(obj, name, default)
    if value is None:
        return None
    if isinstance(value, (bytes, np.bytes_)):
        value = value.decode('ascii', errors='replace')
    return str(value).rstrip('\x00 ')
