"""Exceptions raised while building or rendering a topology."""


class PciTopoError(Exception):
    """Base class for all pcitopo errors."""


class TopologyError(PciTopoError):
    """The input does not have the structure the renderer relies on.

    Raised for example when a port that has been descended into has no
    link capability line, or a switch port has no secondary bus.
    """
