class BqmError(Exception):
    """Base class of the errors raised by binary quadratic models."""


class InteractionNotFound(BqmError, KeyError):
    """Raised when a checked lookup asks for an interaction that is not stored."""

    def __str__(self):
        # KeyError quotes its argument otherwise
        return Exception.__str__(self)


class InvalidArgument(BqmError, ValueError):
    pass


class LogicError(BqmError, RuntimeError):
    pass


class InconsistentModelError(LogicError):
    """Raised when the two stored copies of an interaction disagree."""
