# campus_nav/domain/errors.py


class NavigationError(Exception):
    """Base class for every error raised by the navigation core."""


class EmptyPathError(NavigationError):
    """The path source yielded no usable points; no route can be drawn."""


class IndexOutOfRangeError(NavigationError, IndexError):
    """A path index outside [0, len(path)). Always a caller bug."""


class InvalidCoordinateError(NavigationError, ValueError):
    pass


class UnknownLocationError(NavigationError, KeyError):
    pass


class NoFixError(NavigationError):
    """No position sample has arrived yet ("waiting for GPS")."""
