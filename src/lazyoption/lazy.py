import inspect
import logging
import threading
from typing import Any, Callable, Generic, Iterable, Optional, TypeVar, Union

from .errors import InvalidArgumentError, InvalidStateError
from .functions import Predicate, Supplier, Unary, always
from .option import Option, TypeId, expect_option, from_value

log = logging.getLogger(__name__)

A = TypeVar('A', covariant=True)
B = TypeVar('B')


def _check_callable(f: Any, args: tuple) -> None:
    if not callable(f):
        raise InvalidArgumentError(f'Invalid callback given: {f!r}')
    try:
        signature = inspect.signature(f)
    except (TypeError, ValueError):
        # builtins without introspectable signatures
        return
    try:
        signature.bind(*args)
    except TypeError as e:
        raise InvalidArgumentError(f'Invalid callback given: {e}') from e


class LazyOption(Option, Generic[A]):
    """
    An option whose value is computed on first use. The computation
    is called with ``args`` the first time any option method is used,
    must return an option, and is never called again once it has.
    All option methods are then delegated to the returned option.

    If the computation raises, the exception propagates and the
    computation is tried again the next time the option is used.
    If it returns something that is not an option, `InvalidStateError`
    is raised, now and on every later use.

    Example:
        >>> def lookup(key):
        ...     print('looking up', key)
        ...     return from_value(os.environ.get(key))
        >>> home = LazyOption(lookup, ['HOME'])
        >>> home
        LazyOption(...not evaluated...)
        >>> home.map(len).get_or_else(0)
        looking up HOME
        10
        >>> home
        LazyOption(Some('/home/me'))

    Args:
        computation: Callable that returns an option
        args: Positional arguments for ``computation``
    Raises:
        InvalidArgumentError: if ``computation`` can't be called \
        with ``args``
    """
    def __init__(self,
                 computation: Callable[..., Option],
                 args: Iterable[Any] = ()):
        try:
            args = tuple(args)
        except TypeError as e:
            raise InvalidArgumentError(
                f'Invalid callback given: arguments {args!r} are not iterable'
            ) from e
        _check_callable(computation, args)
        self._computation = computation
        self._args = args
        self._option: Optional[Option] = None
        self._error: Optional[InvalidStateError] = None
        self._evaluating = False
        self._lock = threading.RLock()

    @staticmethod
    def of(computation: Callable[..., Option],
           args: Iterable[Any] = ()) -> 'LazyOption':
        """
        Create a `LazyOption`. Same as calling the constructor

        Example:
            >>> LazyOption.of(lambda v: Some(v), [1]).get()
            1
        """
        return LazyOption(computation, args)

    @staticmethod
    def from_value(value: B, none_value: Any = None) -> 'LazyOption[B]':
        """
        Wrap an already known value in a `LazyOption`, for call sites
        that expect one

        Example:
            >>> LazyOption.from_value(1)
            LazyOption(...not evaluated...)
            >>> LazyOption.from_value(1).get()
            1

        Args:
            value: The value to wrap
            none_value: The value that signals absence
        Return:
            `LazyOption` that evaluates to `from_value(value, none_value)`
        """
        return LazyOption(always(from_value(value, none_value)))

    def is_resolved(self) -> bool:
        """
        Test if the computation has already produced an option,
        without calling it

        Return:
            True if this option has been evaluated, False otherwise
        """
        return self._option is not None

    def _resolve(self) -> Option:
        option = self._option
        if option is not None:
            return option
        with self._lock:
            if self._option is not None:
                return self._option
            if self._error is not None:
                raise self._error.with_traceback(None)
            if self._evaluating:
                raise InvalidStateError(
                    f'{self._computation!r} used the LazyOption '
                    'it is computing'
                )
            self._evaluating = True
            try:
                result = self._computation(*self._args)
            except Exception:
                log.debug(
                    'Computation %r raised, LazyOption left unevaluated',
                    self._computation,
                    exc_info=True
                )
                raise
            finally:
                self._evaluating = False
            try:
                option = expect_option(result)
            except InvalidStateError as e:
                log.debug('Computation %r failed: %s', self._computation, e)
                self._error = e
                raise
            log.debug('Computation %r returned %r', self._computation, option)
            self._option = option
            return option

    def is_defined(self) -> bool:
        return self._resolve().is_defined()

    def is_empty(self) -> bool:
        return self._resolve().is_empty()

    def get(self) -> A:
        return self._resolve().get()

    def get_or_else(self, default: Any) -> Any:
        return self._resolve().get_or_else(default)

    def get_or_call(self, supplier: Supplier[Any]) -> Any:
        return self._resolve().get_or_call(supplier)

    def get_or_throw(self, error: BaseException) -> A:
        return self._resolve().get_or_throw(error)

    def or_else(self, alternative: Option) -> Option:
        return self._resolve().or_else(alternative)

    def map(self, f: Unary[A, B]) -> Option:
        return self._resolve().map(f)

    def flat_map(self, f: Unary[A, Option]) -> Option:
        return self._resolve().flat_map(f)

    def filter(self, predicate: Predicate[A]) -> Option:
        return self._resolve().filter(predicate)

    def filter_not(self, predicate: Predicate[A]) -> Option:
        return self._resolve().filter_not(predicate)

    def filter_is_one_of(self, *types: Union[TypeId, Iterable[TypeId]]
                         ) -> Option:
        return self._resolve().filter_is_one_of(*types)

    def select(self, value: Any) -> Option:
        return self._resolve().select(value)

    def reject(self, value: Any) -> Option:
        return self._resolve().reject(value)

    def fold_left(self, initial: B, f: Callable[[B, A], B]) -> B:
        return self._resolve().fold_left(initial, f)

    def fold_right(self, initial: B, f: Callable[[A, B], B]) -> B:
        return self._resolve().fold_right(initial, f)

    def for_all(self, f: Callable[[A], Any]) -> Option:
        return self._resolve().for_all(f)

    def if_defined(self, f: Callable[[A], Any]) -> None:
        self._resolve().if_defined(f)

    def __repr__(self) -> str:
        option = self._option
        if option is None:
            return 'LazyOption(...not evaluated...)'
        return f'LazyOption({option!r})'


__all__ = ['LazyOption']
