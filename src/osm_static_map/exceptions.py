"""Exceptions raised by the static map URL builder."""


class StaticMapError(Exception):
    """Base class for all errors raised by this package."""


class InvalidArgument(StaticMapError, ValueError):
    """A marker, size, center or zoom value is malformed."""


class DegenerateInput(StaticMapError, ValueError):
    """The input cannot produce a meaningful map geometry.

    Raised for a map width of zero pixels or a bounding box over no points.
    """
