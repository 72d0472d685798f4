import logging
import threading
import time
from unittest.mock import Mock

import pytest
from hypothesis import assume, given

from lazyoption import (EmptyValueError, InvalidArgumentError,
                        InvalidStateError, LazyOption, Nothing, Some, always,
                        compose, from_value, identity)
from lazyoption.hypothesis_strategies import (anything, lazy_options, options,
                                              unaries)

from .laws import LawsTest


class Subject:
    pass


def lazy(option):
    return LazyOption(always(option))


class TestLazyOption(LawsTest):
    @given(anything())
    def test_equality(self, value):
        assert LazyOption.from_value(value).filter(lambda _: True) == Some(
            value
        )

    @given(anything(), anything())
    def test_inequality(self, first, second):
        assume(first != second)
        assert LazyOption.from_value(first).select(second) == Nothing()

    @given(options(anything()))
    def test_identity_law(self, option):
        assert lazy(option).map(identity) == option

    @given(unaries(anything()), unaries(anything()), options(anything()))
    def test_composition_law(self, f, g, option):
        h = compose(f, g)
        assert lazy(option).map(h) == option.map(g).map(f)

    @given(options(anything()))
    def test_right_identity_law(self, option):
        assert lazy(option).flat_map(Some) == option

    @given(anything(), unaries(options(anything())))
    def test_left_identity_law(self, value, f):
        assert lazy(Some(value)).flat_map(f) == f(value)

    @given(
        options(anything()),
        unaries(options(anything())),
        unaries(options(anything()))
    )
    def test_associativity_law(self, option, f, g):
        assert lazy(option).flat_map(f).flat_map(g) == lazy(option).flat_map(
            lambda x: f(x).flat_map(g)
        )


@pytest.mark.parametrize('create', [LazyOption, LazyOption.of])
def test_get_with_arguments(create):
    computation = Mock(return_value=Some('foo'))
    option = create(computation, ['foo'])

    assert option.get() == 'foo'
    assert option.get_or_else(None) == 'foo'
    assert option.get_or_call(Mock()) == 'foo'
    assert option.get_or_throw(RuntimeError('does not exist')) == 'foo'
    assert not option.is_empty()
    computation.assert_called_once_with('foo')


@pytest.mark.parametrize('create', [LazyOption, LazyOption.of])
def test_get_without_arguments(create):
    computation = Mock(return_value=Some('foo'))
    option = create(computation)

    assert option.is_defined()
    assert not option.is_empty()
    assert option.get() == 'foo'
    assert option.get_or_else(None) == 'foo'
    assert option.get_or_call(Mock()) == 'foo'
    assert option.get_or_throw(RuntimeError('does not exist')) == 'foo'
    computation.assert_called_once_with()


def test_computation_returns_nothing():
    computation = Mock(return_value=Nothing())
    option = LazyOption.of(computation)

    assert not option.is_defined()
    assert option.is_empty()
    assert not option
    assert option.get_or_else('alt') == 'alt'
    assert option.get_or_call(lambda: 'alt') == 'alt'
    with pytest.raises(EmptyValueError, match='Nothing has no value'):
        option.get()
    computation.assert_called_once_with()


def test_get_or_throw_raises_given_error():
    error = RuntimeError('missing')
    with pytest.raises(RuntimeError) as info:
        lazy(Nothing()).get_or_throw(error)
    assert info.value is error


def test_computation_returns_none():
    computation = Mock(return_value=None)
    option = LazyOption.of(computation)

    with pytest.raises(InvalidStateError,
                       match='Expected instance of Option, got None'):
        option.is_defined()


def test_computation_returns_non_option_is_not_retried():
    computation = Mock(return_value=1)
    option = LazyOption(computation)

    with pytest.raises(InvalidStateError) as first:
        option.get()
    assert '1' in str(first.value)
    assert 'int' in str(first.value)
    with pytest.raises(InvalidStateError) as second:
        option.get_or_else(0)
    assert second.value is first.value
    computation.assert_called_once_with()
    assert not option.is_resolved()


def test_computation_that_raises_is_retried():
    computation = Mock(side_effect=[ValueError('boom'), Some(1)])
    option = LazyOption(computation)

    with pytest.raises(ValueError, match='boom'):
        option.get()
    assert not option.is_resolved()
    assert repr(option) == 'LazyOption(...not evaluated...)'
    assert option.get() == 1
    assert computation.call_count == 2


@pytest.mark.parametrize('create', [LazyOption, LazyOption.of])
def test_invalid_callback(create):
    with pytest.raises(InvalidArgumentError, match='Invalid callback given'):
        create('invalidCallback')


def test_invalid_callback_is_type_error():
    with pytest.raises(TypeError):
        LazyOption(None)


def test_callback_with_wrong_arity():
    with pytest.raises(InvalidArgumentError, match='Invalid callback given'):
        LazyOption(lambda: Some(1), ['unexpected'])
    with pytest.raises(InvalidArgumentError, match='Invalid callback given'):
        LazyOption(lambda a, b: Some(a + b), [1])


def test_invalid_callback_is_rejected_before_evaluation():
    computation = Mock(return_value=Some(1))
    with pytest.raises(InvalidArgumentError):
        LazyOption(lambda: computation(), [1])
    computation.assert_not_called()


def test_if_defined():
    f = Mock()
    assert LazyOption.from_value('foo').if_defined(f) is None
    f.assert_called_once_with('foo')


def test_for_all():
    f = Mock()
    result = LazyOption.from_value('foo').for_all(f)
    assert isinstance(result, Some)
    assert result == Some('foo')
    f.assert_called_once_with('foo')


def test_for_all_nothing():
    f = Mock()
    assert LazyOption.from_value(None).for_all(f) == Nothing()
    f.assert_not_called()


def test_from_value_none_value():
    assert LazyOption.from_value(None).is_empty()
    assert LazyOption.from_value('', none_value='').is_empty()
    assert LazyOption.from_value(0).get() == 0


def test_or_else():
    some = Some('foo')
    option = LazyOption.of(lambda: some)
    assert option.or_else(Nothing()) is some
    assert option.or_else(Some('bar')) is some

    alternative = Some('bar')
    assert lazy(Nothing()).or_else(alternative) is alternative


def test_fold_left_right():
    option = from_value(5)
    assert LazyOption(lambda: option).fold_left(
        'a', lambda acc, v: acc + str(v)
    ) == 'a5'
    assert LazyOption(lambda: option).fold_right(
        'a', lambda v, acc: str(v) + acc
    ) == '5a'
    assert lazy(Nothing()).fold_left('a', Mock()) == 'a'
    assert lazy(Nothing()).fold_right('a', Mock()) == 'a'


def test_filter_is_one_of():
    some = Some(Subject())
    option = LazyOption.of(lambda: some)

    assert option.filter_is_one_of('unknown', 'unknown2') == Nothing()
    assert option.filter_is_one_of(['unknown', 'unknown2']) == Nothing()

    assert option.filter_is_one_of(Subject, 'unknown') is some
    assert option.filter_is_one_of('Subject', 'unknown') is some
    assert option.filter_is_one_of(['Subject', 'unknown']) is some
    assert option.filter_is_one_of(iter(['Subject', 'unknown'])) is some


def test_filters():
    some = Some(2)
    option = lazy(some)
    assert option.filter(lambda v: v > 1) is some
    assert option.filter(lambda v: v > 2) == Nothing()
    assert option.filter_not(lambda v: v > 2) is some
    assert option.select(2) is some
    assert option.reject(2) == Nothing()


def test_map():
    assert lazy(Some(1)).map(str) == Some('1')
    assert lazy(Nothing()).map(str) == Nothing()


def test_flat_map_does_not_double_wrap():
    assert lazy(Some(1)).flat_map(lambda v: Some(v + 1)) == Some(2)
    with pytest.raises(InvalidStateError):
        lazy(Some(1)).flat_map(lambda v: v + 1)


def test_repr():
    computation = Mock(return_value=from_value(1))
    option = LazyOption.of(computation)

    assert repr(option) == 'LazyOption(...not evaluated...)'
    assert str(option) == 'LazyOption(...not evaluated...)'
    computation.assert_not_called()
    option.get_or_else(0)
    assert repr(option) == 'LazyOption(Some(1))'
    assert str(option) == 'LazyOption(Some(1))'
    computation.assert_called_once_with()


@given(lazy_options(anything()))
def test_repr_does_not_evaluate(option):
    assert repr(option) == 'LazyOption(...not evaluated...)'
    assert not option.is_resolved()


@given(anything())
def test_computation_is_called_once(value):
    computation = Mock(return_value=Some(value))
    option = LazyOption(computation)

    option.is_defined()
    option.get()
    option.map(identity)
    option.filter(lambda _: True)
    option.fold_left(None, lambda a, b: b)
    option.for_all(identity)
    repr(option)
    computation.assert_called_once_with()
    assert option.is_resolved()


def test_nested_lazy_option():
    inner = lazy(Some(1))
    outer = LazyOption(lambda: inner)

    assert repr(outer) == 'LazyOption(...not evaluated...)'
    assert outer.get() == 1
    assert repr(outer) == 'LazyOption(LazyOption(Some(1)))'


def test_reentrant_evaluation():
    def computation():
        return option.map(str)

    option = LazyOption(computation)
    with pytest.raises(InvalidStateError, match='used the LazyOption'):
        option.get()
    assert not option.is_resolved()


def test_concurrent_evaluation():
    calls = []

    def computation():
        calls.append(None)
        time.sleep(0.05)
        return Some(len(calls))

    option = LazyOption(computation)
    results = []
    threads = [
        threading.Thread(target=lambda: results.append(option.get()))
        for _ in range(8)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(calls) == 1
    assert results == [1] * 8


def test_evaluation_is_logged(caplog):
    with caplog.at_level(logging.DEBUG, logger='lazyoption.lazy'):
        lazy(Some(1)).get()
    assert 'returned Some(1)' in caplog.text


def test_invalid_return_is_logged(caplog):
    with caplog.at_level(logging.DEBUG, logger='lazyoption.lazy'):
        with pytest.raises(InvalidStateError):
            LazyOption(lambda: 'value').get()
    assert 'Expected instance of Option' in caplog.text


@pytest.mark.parametrize('cls', [Some, Nothing])
def test_computation_returns_option_class(cls):
    option = LazyOption(lambda: cls)

    with pytest.raises(InvalidStateError, match='Expected instance of Option'):
        option.is_defined()
    assert not option.is_resolved()


def test_arguments_must_be_iterable():
    with pytest.raises(InvalidArgumentError, match='Invalid callback given'):
        LazyOption(lambda v: Some(v), 5)


def _traceback_depth(error):
    depth = 0
    tb = error.__traceback__
    while tb is not None:
        depth += 1
        tb = tb.tb_next
    return depth


def test_memoized_error_traceback_does_not_grow():
    option = LazyOption(lambda: 'value')
    depths = []
    for _ in range(3):
        with pytest.raises(InvalidStateError) as info:
            option.get()
        depths.append(_traceback_depth(info.value))
    assert depths[1] == depths[2]
