from typing import Any, Callable, Tuple, TypeVar, Union

from . import functions, lazy, option

try:
    from hypothesis.strategies import (SearchStrategy, booleans, builds,
                                       composite, floats, integers, just,
                                       one_of, text)
except ImportError:
    raise ImportError(
        'Could not import hypothesis. To use '
        'lazyoption.hypothesis_strategies, install lazyoption with '
        '\n\n\tpip install lazyoption[test]'
    )

A = TypeVar('A')


def _everything(allow_nan: bool = False) -> Tuple[SearchStrategy[int],
                                                  SearchStrategy[bool],
                                                  SearchStrategy[str],
                                                  SearchStrategy[float]]:
    return integers(), booleans(), text(), floats(allow_nan=allow_nan)


def anything(allow_nan: bool = False
             ) -> SearchStrategy[Union[int, bool, str, float]]:
    """
    Create a search strategy that produces one of int, bool, str or floats.

    Args:
        allow_nan: whether to allow nan values
    Return:
        Search strategy that produces ints, bools, str or floats
    """
    return one_of(*_everything(allow_nan))


def unaries(return_strategy: SearchStrategy[A]
            ) -> SearchStrategy[Callable[[object], A]]:
    """
    Create a search strategy that produces functions of 1 argument

    Args:
        return_strategy: strategy used to draw return values
    Return:
        Search strategy that produces callables of 1 argument
    """
    @composite
    def _(draw):
        a: A = draw(return_strategy)
        return lambda _: a

    return _()


def somes(value_strategy: SearchStrategy[A]
          ) -> SearchStrategy[option.Some[A]]:
    """
    Create a search strategy that produces `lazyoption.Some` values

    Example:
        >>> somes(integers()).example()
        Some(1)
    """
    return builds(option.Some, value_strategy)


def options(value_strategy: SearchStrategy[A]
            ) -> SearchStrategy[option.Option]:
    """
    Create a search strategy that produces `lazyoption.Some` and
    `lazyoption.Nothing` values

    Example:
        >>> options(integers()).example()
        None
    Args:
        value_strategy: search strategy to draw values from
    Return:
        search strategy that produces eager options
    """
    return one_of(somes(value_strategy), just(option.Nothing()))


def lazy_options(value_strategy: SearchStrategy[A]
                 ) -> SearchStrategy[lazy.LazyOption]:
    """
    Create a search strategy that produces unevaluated
    `lazyoption.LazyOption` values

    Example:
        >>> lazy_options(integers()).example()
        LazyOption(...not evaluated...)
    Args:
        value_strategy: search strategy to draw wrapped values from
    Return:
        search strategy that produces lazy options
    """
    def lazy_option(o: option.Option) -> lazy.LazyOption:
        return lazy.LazyOption(functions.always(o))

    return builds(lazy_option, options(value_strategy))


def any_options(value_strategy: SearchStrategy[A]
                ) -> SearchStrategy[Any]:
    """
    Create a search strategy that produces eager and lazy options
    """
    return one_of(options(value_strategy), lazy_options(value_strategy))
