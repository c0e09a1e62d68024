class AntSimError(Exception):
    """Base class for errors raised by antsim."""


class InvalidStateError(AntSimError, RuntimeError):
    """An operation was called in a state that does not allow it."""
