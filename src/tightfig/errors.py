"""Exceptions and warnings raised by tightfig."""


class TightFigError(Exception):
    """Base class for all tightfig errors."""


class InvalidArgument(TightFigError, ValueError):
    """Malformed layout input. Raised before the host is touched."""


class InsufficientSpaceError(TightFigError, ValueError):
    """Margins and panel decorations leave no room for the panels."""


class HostError(TightFigError):
    """The host graphics system rejected an operation on a panel."""


class IterationCapExceeded(RuntimeWarning):
    """The layout loop stopped at its iteration cap without converging.

    The last computed layout is still applied and usable, it is just not
    guaranteed to be a fixed point.
    """
