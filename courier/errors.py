class CourierError(Exception):
    """Base class for errors raised by the request workbench."""


class CompositionError(CourierError, ValueError):
    """A request field is outside its closed set (e.g. an unknown HTTP method)."""


class PersistenceError(CourierError):
    """The environment store could not complete an operation."""
