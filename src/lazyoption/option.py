from abc import ABC, abstractmethod
from typing import (Any, Callable, Generic, Iterable, Iterator, NoReturn,
                    Sequence, TypeVar, Union)

from typing_extensions import final

from .errors import EmptyValueError, InvalidStateError
from .functions import Predicate, Supplier, Unary
from .immutable import Immutable
from .protocols import is_option

A = TypeVar('A', covariant=True)
B = TypeVar('B')

TypeId = Union[str, type]


class Option(ABC):
    """
    Abstract super class for values that may or may not be present.
    Should not be instantiated directly.
    Use `Some`, `Nothing` or `LazyOption` instead.

    """
    @staticmethod
    def from_value(value: Any, none_value: Any = None) -> 'Option':
        """
        Wrap a value that may be absent in an `Option`

        Example:
            >>> Option.from_value(1)
            Some(1)
            >>> Option.from_value(None)
            None
            >>> Option.from_value('', none_value='')
            None

        Args:
            value: The value to wrap
            none_value: The value that signals absence
        Return:
            `Nothing` if ``value`` is ``none_value``, or has the same type \
            and equals it, \
            `Some(value)` otherwise
        """
        return from_value(value, none_value)

    @abstractmethod
    def is_defined(self) -> bool:
        """
        Test if this option holds a value

        Example:
            >>> Some(1).is_defined()
            True
            >>> Nothing().is_defined()
            False

        Return:
            True if this is a `Some`, False otherwise
        """
        raise NotImplementedError()

    def is_empty(self) -> bool:
        """
        Test if this option is empty

        Return:
            True if this is a `Nothing`, False otherwise
        """
        return not self.is_defined()

    @abstractmethod
    def get(self) -> Any:
        """
        Get the value wrapped by this option

        Example:
            >>> Some(1).get()
            1
            >>> Nothing().get()
            EmptyValueError: Nothing has no value

        Raises:
            EmptyValueError: if this option is empty
        Return:
            The wrapped value
        """
        raise NotImplementedError()

    @abstractmethod
    def get_or_else(self, default: Any) -> Any:
        """
        Get the wrapped value, or ``default`` if this option is empty

        Example:
            >>> Some(1).get_or_else(2)
            1
            >>> Nothing().get_or_else(2)
            2

        Args:
            default: Value to return if this option is empty
        Return:
            The wrapped value or ``default``
        """
        raise NotImplementedError()

    @abstractmethod
    def get_or_call(self, supplier: Supplier[Any]) -> Any:
        """
        Get the wrapped value, or the result of calling ``supplier``
        if this option is empty. ``supplier`` is only called when needed

        Example:
            >>> Nothing().get_or_call(lambda: 2)
            2

        Args:
            supplier: Function of no arguments that produces a default
        Return:
            The wrapped value or ``supplier()``
        """
        raise NotImplementedError()

    @abstractmethod
    def get_or_throw(self, error: BaseException) -> Any:
        """
        Get the wrapped value, or raise ``error`` if this option is empty

        Example:
            >>> Nothing().get_or_throw(KeyError('name'))
            KeyError: 'name'

        Args:
            error: The exception to raise
        Return:
            The wrapped value
        """
        raise NotImplementedError()

    @abstractmethod
    def or_else(self, alternative: 'Option') -> 'Option':
        """
        Get this option if it is defined, ``alternative`` otherwise

        Example:
            >>> Some(1).or_else(Some(2))
            Some(1)
            >>> Nothing().or_else(Some(2))
            Some(2)

        Args:
            alternative: Option to use if this option is empty
        Return:
            This option or ``alternative``
        """
        raise NotImplementedError()

    @abstractmethod
    def map(self, f: Unary[Any, Any]) -> 'Option':
        """
        Apply ``f`` to the wrapped value

        Example:
            >>> Some(1).map(str)
            Some('1')
            >>> Nothing().map(str)
            None

        Args:
            f: Function to apply to the wrapped value
        Return:
            `Some` wrapping the result of ``f`` if this option is \
            defined, `Nothing` otherwise
        """
        raise NotImplementedError()

    @abstractmethod
    def flat_map(self, f: Unary[Any, 'Option']) -> 'Option':
        """
        Chain together a function that itself returns an option

        Example:
            >>> f = lambda i: Some(1 / i) if i != 0 else Nothing()
            >>> Some(2).flat_map(f)
            Some(0.5)
            >>> Some(0).flat_map(f)
            None

        Args:
            f: Function from the wrapped value to an option
        Raises:
            InvalidStateError: if ``f`` doesn't return an option
        Return:
            The option returned by ``f``, or `Nothing` if this option \
            is empty
        """
        raise NotImplementedError()

    @abstractmethod
    def filter(self, predicate: Predicate[Any]) -> 'Option':
        """
        Keep this option only if the wrapped value satisfies ``predicate``

        Example:
            >>> Some(2).filter(lambda v: v % 2 == 0)
            Some(2)
            >>> Some(1).filter(lambda v: v % 2 == 0)
            None

        Args:
            predicate: Test for the wrapped value
        Return:
            This option if it is defined and ``predicate`` holds, \
            `Nothing` otherwise
        """
        raise NotImplementedError()

    @abstractmethod
    def filter_not(self, predicate: Predicate[Any]) -> 'Option':
        """
        Keep this option only if the wrapped value does not satisfy
        ``predicate``

        Args:
            predicate: Test for the wrapped value
        Return:
            This option if it is defined and ``predicate`` doesn't hold, \
            `Nothing` otherwise
        """
        raise NotImplementedError()

    @abstractmethod
    def filter_is_one_of(self, *types: Union[TypeId, Iterable[TypeId]]
                         ) -> 'Option':
        """
        Keep this option only if the wrapped value is an instance of
        one of ``types``. Types are given as classes or as class names,
        either individually or in any iterable

        Example:
            >>> Some(1).filter_is_one_of('int', 'str')
            Some(1)
            >>> Some(1).filter_is_one_of([str, bytes])
            None

        Args:
            types: Classes, class names or iterables of those
        Return:
            This option if the wrapped value matches, `Nothing` otherwise
        """
        raise NotImplementedError()

    @abstractmethod
    def select(self, value: Any) -> 'Option':
        """
        Keep this option only if the wrapped value equals ``value``

        Example:
            >>> Some(1).select(1)
            Some(1)
            >>> Some(1).select(2)
            None
        """
        raise NotImplementedError()

    @abstractmethod
    def reject(self, value: Any) -> 'Option':
        """
        Keep this option only if the wrapped value differs from ``value``
        """
        raise NotImplementedError()

    @abstractmethod
    def fold_left(self, initial: B, f: Callable[[B, Any], B]) -> B:
        """
        Combine ``initial`` with the wrapped value

        Example:
            >>> Some(1).fold_left(10, lambda acc, v: acc - v)
            9
            >>> Nothing().fold_left(10, lambda acc, v: acc - v)
            10

        Args:
            initial: Starting value
            f: Function of ``initial`` and the wrapped value
        Return:
            ``f(initial, value)`` if this option is defined, \
            ``initial`` otherwise
        """
        raise NotImplementedError()

    @abstractmethod
    def fold_right(self, initial: B, f: Callable[[Any, B], B]) -> B:
        """
        Combine the wrapped value with ``initial``

        Example:
            >>> Some(1).fold_right(10, lambda v, acc: acc - v)
            9

        Args:
            initial: Starting value
            f: Function of the wrapped value and ``initial``
        Return:
            ``f(value, initial)`` if this option is defined, \
            ``initial`` otherwise
        """
        raise NotImplementedError()

    @abstractmethod
    def for_all(self, f: Callable[[Any], Any]) -> 'Option':
        """
        Call ``f`` with the wrapped value for its side effect, and get
        this option back for further chaining

        Example:
            >>> Some(1).for_all(print).map(str)
            1
            Some('1')

        Args:
            f: Function to call with the wrapped value
        Return:
            This option
        """
        raise NotImplementedError()

    @abstractmethod
    def if_defined(self, f: Callable[[Any], Any]) -> None:
        """
        Call ``f`` with the wrapped value if this option is defined

        Args:
            f: Function to call with the wrapped value
        """
        raise NotImplementedError()

    def __bool__(self) -> bool:
        return self.is_defined()

    def __str__(self) -> str:
        return repr(self)


def _type_ids(types: Iterable[Any]) -> Iterator[TypeId]:
    for t in types:
        if isinstance(t, (str, type)):
            yield t
        else:
            yield from _type_ids(t)


def _names(cls: type) -> Iterator[str]:
    yield cls.__name__
    yield cls.__qualname__
    yield f'{cls.__module__}.{cls.__qualname__}'


def is_one_of(value: Any, types: Sequence[Any]) -> bool:
    """
    Test if ``value`` is an instance of any of ``types``

    Example:
        >>> is_one_of(1, ['str', ('int', float)])
        True

    Args:
        value: The value to test
        types: Classes, class names or (nested) iterables of those
    Return:
        True if the class of ``value``, or one of its bases, matches \
        one of ``types``
    """
    names = {name for cls in type(value).__mro__ for name in _names(cls)}
    for t in _type_ids(types):
        if isinstance(t, str):
            if t in names:
                return True
        elif isinstance(value, t):
            return True
    return False


def expect_option(value: Any) -> Option:
    """
    Check that ``value`` conforms to the option contract

    Args:
        value: The value to check
    Raises:
        InvalidStateError: if ``value`` isn't an option
    Return:
        ``value``
    """
    if not is_option(value):
        raise InvalidStateError(
            f'Expected instance of Option, got {value!r} '
            f'({type(value).__qualname__})'
        )
    return value


@final
class Some(Immutable, Option, Generic[A]):
    """
    Represents a value that is present

    """
    value: A
    """
    The wrapped value
    """

    @staticmethod
    def of(value: B) -> 'Some[B]':
        return Some(value)

    def is_defined(self) -> bool:
        return True

    def get(self) -> A:
        return self.value

    def get_or_else(self, default: Any) -> A:
        return self.value

    def get_or_call(self, supplier: Supplier[Any]) -> A:
        return self.value

    def get_or_throw(self, error: BaseException) -> A:
        return self.value

    def or_else(self, alternative: Option) -> 'Some[A]':
        return self

    def map(self, f: Unary[A, B]) -> 'Some[B]':
        return Some(f(self.value))

    def flat_map(self, f: Unary[A, Option]) -> Option:
        return expect_option(f(self.value))

    def filter(self, predicate: Predicate[A]) -> Option:
        return self if predicate(self.value) else _NOTHING

    def filter_not(self, predicate: Predicate[A]) -> Option:
        return _NOTHING if predicate(self.value) else self

    def filter_is_one_of(self, *types: Union[TypeId, Iterable[TypeId]]
                         ) -> Option:
        return self if is_one_of(self.value, types) else _NOTHING

    def select(self, value: Any) -> Option:
        return self if self.value == value else _NOTHING

    def reject(self, value: Any) -> Option:
        return _NOTHING if self.value == value else self

    def fold_left(self, initial: B, f: Callable[[B, A], B]) -> B:
        return f(initial, self.value)

    def fold_right(self, initial: B, f: Callable[[A, B], B]) -> B:
        return f(self.value, initial)

    def for_all(self, f: Callable[[A], Any]) -> 'Some[A]':
        f(self.value)
        return self

    def if_defined(self, f: Callable[[A], Any]) -> None:
        f(self.value)

    def __repr__(self) -> str:
        return f'Some({self.value!r})'


@final
class Nothing(Immutable, Option):
    """
    Represents an absent value. All instances are equal,
    `Nothing.instance` gives a shared one

    """
    @staticmethod
    def instance() -> 'Nothing':
        return _NOTHING

    def is_defined(self) -> bool:
        return False

    def get(self) -> NoReturn:
        raise EmptyValueError(f'{type(self).__name__} has no value')

    def get_or_else(self, default: B) -> B:
        return default

    def get_or_call(self, supplier: Supplier[B]) -> B:
        return supplier()

    def get_or_throw(self, error: BaseException) -> NoReturn:
        raise error

    def or_else(self, alternative: Option) -> Option:
        return alternative

    def map(self, f: Unary[Any, Any]) -> 'Nothing':
        return self

    def flat_map(self, f: Unary[Any, Option]) -> 'Nothing':
        return self

    def filter(self, predicate: Predicate[Any]) -> 'Nothing':
        return self

    def filter_not(self, predicate: Predicate[Any]) -> 'Nothing':
        return self

    def filter_is_one_of(self, *types: Union[TypeId, Iterable[TypeId]]
                         ) -> 'Nothing':
        return self

    def select(self, value: Any) -> 'Nothing':
        return self

    def reject(self, value: Any) -> 'Nothing':
        return self

    def fold_left(self, initial: B, f: Callable[[B, Any], B]) -> B:
        return initial

    def fold_right(self, initial: B, f: Callable[[Any, B], B]) -> B:
        return initial

    def for_all(self, f: Callable[[Any], Any]) -> 'Nothing':
        return self

    def if_defined(self, f: Callable[[Any], Any]) -> None:
        pass

    def __repr__(self) -> str:
        return 'None'


_NOTHING = Nothing()


def from_value(value: Any, none_value: Any = None) -> Option:
    """
    Wrap a value that may be absent in an `Option`

    Example:
        >>> from_value('value')
        Some('value')
        >>> from_value(None)
        None
        >>> from_value(-1, none_value=-1)
        None

    Args:
        value: The value to wrap
        none_value: The value that signals absence
    Return:
        `Nothing` if ``value`` is ``none_value``, or has the same type and \
        equals it, `Some(value)` otherwise. ``0`` and ``False`` are \
        not mistaken for each other
    """
    if value is none_value or (
        type(value) is type(none_value) and value == none_value
    ):
        return _NOTHING
    return Some(value)


def from_return(f: Callable[..., Any],
                args: Iterable[Any] = (),
                none_value: Any = None) -> Option:
    """
    Defer calling a function that may return an absent value

    Example:
        >>> o = from_return(dict(a=1).get, ['b'])
        >>> o
        LazyOption(...not evaluated...)
        >>> o.get_or_else(0)
        0

    Args:
        f: The function to call
        args: Positional arguments for ``f``
        none_value: The return value that signals absence
    Return:
        `LazyOption` that wraps the return value of ``f`` with `from_value`
    """
    from .lazy import LazyOption

    args = tuple(args)

    def computation() -> Option:
        return from_value(f(*args), none_value)

    return LazyOption(computation)


def ensure(value: Any, none_value: Any = None) -> Option:
    """
    Turn ``value`` into an option. Options are returned as they are,
    callables are called lazily and their return value wrapped

    Example:
        >>> ensure(Some(1))
        Some(1)
        >>> ensure(lambda: 1).get()
        1
        >>> ensure(None)
        None

    Args:
        value: Option, callable or plain value
        none_value: The value that signals absence
    Return:
        ``value`` as an option
    """
    from .lazy import LazyOption

    if is_option(value):
        return value
    if callable(value):

        def computation() -> Option:
            result = value()
            if is_option(result):
                return result
            return from_value(result, none_value)

        return LazyOption(computation)
    return from_value(value, none_value)


__all__ = [
    'Option',
    'Some',
    'Nothing',
    'from_value',
    'from_return',
    'ensure',
    'is_one_of',
    'expect_option'
]
