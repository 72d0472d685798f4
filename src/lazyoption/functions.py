from typing import Any, Callable, Generic, Tuple, TypeVar

from .immutable import Immutable

A = TypeVar('A')
B = TypeVar('B')

Unary = Callable[[A], B]
Predicate = Callable[[A], bool]
Supplier = Callable[[], A]


def identity(v: A) -> A:
    """
    The identity function. Gives back its argument

    Example:
        >>> Some(1).map(identity)
        Some(1)

    Args:
        v: The value to get back
    Return:
        `v`
    """
    return v


class Always(Generic[A], Immutable):
    """
    A Callable that returns the same value
    whatever arguments it's called with
    """
    value: A

    def __call__(self, *args: Any, **kwargs: Any) -> A:
        return self.value


def always(value: A) -> Callable[..., A]:
    """
    Get a function that always returns `value`. Useful as a
    computation for a `LazyOption` that has nothing to defer

    Example:
        >>> LazyOption(always(Some(1))).get()
        1

    Args:
        value: The value to return
    Return:
        function that always returns `value`
    """
    return Always(value)


class Composition(Immutable):
    functions: Tuple[Callable, ...]

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        first, *rest = reversed(self.functions)
        result = first(*args, **kwargs)
        for f in rest:
            result = f(result)
        return result


def compose(
    f: Callable[[Any], Any],
    g: Callable[[Any], Any],
    *functions: Callable[[Any], Any]
) -> Callable[[Any], Any]:
    """
    Compose functions from right to left

    Example:
        >>> h = compose(str, lambda v: v * 2)
        >>> Some(3).map(h)
        Some('6')

    Args:
        f: the outermost function in the composition
        g: the function to be composed with f
        functions: further functions, applied before `g`
    Return:
        `f` composed with `g` composed with `functions`
    """
    return Composition((f, g) + functions)


__all__ = [
    'identity', 'always', 'compose', 'Unary', 'Predicate', 'Supplier'
]
