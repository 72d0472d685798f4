class OptionError(Exception):
    """
    Base class for errors raised by `lazyoption`
    """
    pass


class EmptyValueError(OptionError, LookupError):
    """
    Raised when getting the value of an empty option

    Example:
        >>> Nothing().get()
        EmptyValueError: Nothing has no value
    """
    pass


class InvalidArgumentError(OptionError, TypeError):
    """
    Raised when a `LazyOption` is constructed with something that
    can't be called with the given arguments
    """
    pass


class InvalidStateError(OptionError, RuntimeError):
    """
    Raised when a computation that should produce an option
    produces something else
    """
    pass


__all__ = [
    'OptionError',
    'EmptyValueError',
    'InvalidArgumentError',
    'InvalidStateError'
]
