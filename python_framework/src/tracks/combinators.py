"""
Combinators — map / bind / bimap / fold / compose written once.

Option, Result, Try and AsyncResult all expose the same small capability
surface: .map(), .flat_map() and (for the two-track types) .bimap(). The
protocols below name that surface, and the free functions are written
against the protocol rather than against any concrete container:

    fmap(Option.of(3), inc)              # Some(4)
    fmap(Result.success(3), inc)         # Success(4)
    await fmap(AsyncResult.success(3), inc)

    load = compose_m(open_file, read_text, decode)   # Kleisli composition
    await load(path)
"""

from __future__ import annotations

from functools import reduce
from typing import Any, Callable, Protocol, TypeVar, runtime_checkable

from tracks.result import Result

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")
F = TypeVar("F")
R = TypeVar("R")
T_co = TypeVar("T_co", covariant=True)


@runtime_checkable
class Mappable(Protocol[T_co]):
    """A container whose value can be transformed with .map()."""

    def map(self, mapper: Callable[[Any], Any]) -> Any: ...


@runtime_checkable
class Bindable(Protocol[T_co]):
    """A container that chains container-returning functions with .flat_map()."""

    def flat_map(self, mapper: Callable[[Any], Any]) -> Any: ...


@runtime_checkable
class BiMappable(Protocol[T_co]):
    """A two-track container whose tracks can both be transformed with .bimap()."""

    def bimap(self, on_success: Callable[[Any], Any], on_failure: Callable[[Any], Any]) -> Any: ...


# ──────────────────────── Container functions ────────────────────────


def fmap(container: Mappable[T], mapper: Callable[[T], U]) -> Any:
    """container.map(mapper) for any Mappable."""
    return container.map(mapper)


def bind(container: Bindable[T], binder: Callable[[T], Any]) -> Any:
    """container.flat_map(binder) for any Bindable."""
    return container.flat_map(binder)


def bimap(
    container: BiMappable[T],
    on_success: Callable[[T], U],
    on_failure: Callable[[Any], Any],
) -> Any:
    """container.bimap(on_success, on_failure) for any BiMappable."""
    return container.bimap(on_success, on_failure)


def bi_iter(
    result: Result[T, E],
    on_success: Callable[[T], Any],
    on_failure: Callable[[E], Any],
) -> None:
    """Run exactly one of the two callbacks, for whichever track is populated."""
    result.bi_iter(on_success, on_failure)


def fold(result: Result[T, E], seed: R, combine: Callable[[R, Result[T, E]], R]) -> R:
    """Reduce a Result with a seed: combine(seed, result)."""
    return result.fold(seed, combine)


# ──────────────────────── Function composition ────────────────────────


def identity(value: T) -> T:
    return value


def compose(*fns: Callable[[Any], Any]) -> Callable[[Any], Any]:
    """
    Left-to-right function composition.

        compose(f, g)(x) == g(f(x))
        compose()(x) == x
    """
    if not fns:
        return identity
    return lambda value: reduce(lambda acc, fn: fn(acc), fns, value)


def compose_m(*binders: Callable[[Any], Any]) -> Callable[[Any], Any]:
    """
    Kleisli composition of container-returning functions.

    The first function is applied to the input; each following one is bound
    onto the previous container with .flat_map(), so the chain short-circuits
    on the first Failure / Nothing like a hand-written flat_map chain.
    """
    if not binders:
        raise ValueError("compose_m requires at least one function")
    first, *rest = binders

    def composed(value: Any) -> Any:
        return reduce(lambda acc, binder: acc.flat_map(binder), rest, first(value))

    return composed


def pipe(value: T, *fns: Callable[[Any], Any]) -> Any:
    """Thread value through fns left to right: pipe(x, f, g) == g(f(x))."""
    return compose(*fns)(value)
