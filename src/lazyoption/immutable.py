from dataclasses import dataclass


class Immutable:
    """
    Super class that turns subclasses into frozen dataclasses.
    Fields are declared as annotations, and instances can't be
    modified after ``__init__`` returns.

    Example:
        >>> class Pair(Immutable):
        ...     first: int
        ...     second: int
        >>> p = Pair(1, 2)
        >>> p.first = 3
        FrozenInstanceError: cannot assign to field 'first'

    """
    def __init_subclass__(cls,
                          init: bool = True,
                          repr: bool = True,
                          eq: bool = True,
                          order: bool = False,
                          unsafe_hash: bool = False) -> None:
        super().__init_subclass__()
        dataclass(
            frozen=True,
            init=init,
            repr=repr,
            eq=eq,
            order=order,
            unsafe_hash=unsafe_hash
        )(cls)


__all__ = ['Immutable']
