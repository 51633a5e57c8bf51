"""Exception hierarchy shared by the projection, image and IO modules."""


class GeosatError(Exception):
    """Base class for every error raised by geosat."""


class OutOfRangeError(GeosatError, IndexError):
    """A pixel coordinate falls outside the image buffer."""


class InvalidGeometryError(GeosatError, ValueError):
    """A projection is misconfigured or a point has no geometric solution."""


class OutOfDiskError(InvalidGeometryError):
    """A point lies outside the Earth disk visible from the satellite."""


class MalformedInputError(GeosatError, ValueError):
    """Metadata could not be parsed or validated."""
