from typing import Any, Callable, TypeVar

from typing_extensions import Protocol, runtime_checkable

A = TypeVar('A', covariant=True)


@runtime_checkable
class SupportsOption(Protocol[A]):
    """
    Structural description of the option contract. Objects that
    implement all of these methods are accepted anywhere an `Option`
    is expected, e.g as the result of a `LazyOption` computation,
    without having to subclass `Option`.
    """
    def is_defined(self) -> bool:
        pass

    def is_empty(self) -> bool:
        pass

    def get(self) -> A:
        pass

    def get_or_else(self, default: Any) -> Any:
        pass

    def get_or_call(self, supplier: Callable[[], Any]) -> Any:
        pass

    def get_or_throw(self, error: BaseException) -> A:
        pass

    def or_else(self, alternative: Any) -> Any:
        pass

    def map(self, f: Callable[[Any], Any]) -> Any:
        pass

    def flat_map(self, f: Callable[[Any], Any]) -> Any:
        pass

    def filter(self, predicate: Callable[[Any], bool]) -> Any:
        pass

    def filter_not(self, predicate: Callable[[Any], bool]) -> Any:
        pass

    def filter_is_one_of(self, *types: Any) -> Any:
        pass

    def select(self, value: Any) -> Any:
        pass

    def reject(self, value: Any) -> Any:
        pass

    def fold_left(self, initial: Any, f: Callable[[Any, Any], Any]) -> Any:
        pass

    def fold_right(self, initial: Any, f: Callable[[Any, Any], Any]) -> Any:
        pass

    def for_all(self, f: Callable[[Any], Any]) -> Any:
        pass

    def if_defined(self, f: Callable[[Any], Any]) -> None:
        pass


def is_option(value: object) -> bool:
    """
    Test if ``value`` conforms to the option contract

    Example:
        >>> is_option(Some(1))
        True
        >>> is_option(1)
        False

    Args:
        value: The value to test
    Return:
        True if ``value`` is an instance of `Option` or implements \
        `SupportsOption`, False otherwise
    """
    if isinstance(value, type):
        return False
    return isinstance(value, SupportsOption)


__all__ = ['SupportsOption', 'is_option']
