"""Result/Option values with category and context combinators.

``Result`` is a discriminated union of success (``Ok``) and failure (``Err``).
Besides the usual monadic operations it carries the error-annotation
combinators: ``context``, ``with_context``, ``with_category`` and
``bad_request``. Each converts the failure into an ``ApiError`` on the way, so
the annotated result is always a ``Result[T, ApiError]``. Successful results
pass through as the same object.

Example:
    >>> def add_one(request: str) -> Result[str, ApiError]:
    ...     return (
    ...         try_fn(int, request).bad_request()
    ...         .and_then(lambda n: Option.of(n + 1 if n < 2**63 - 1 else None).context("Input too large"))
    ...         .bad_request()
    ...         .map(str)
    ...     )
    >>> add_one("41").unwrap()
    '42'
    >>> add_one("foo").unwrap_err().http_status()
    400

``unwrap()`` on an ``Err`` holding an exception raises it, so it doubles as
the propagation step at the end of a chain.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Generic, TypeVar

from .category import BAD_REQUEST, Category
from .errors import ApiError, into_api_error

if TYPE_CHECKING:
    from .types import MessageFn

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")
F = TypeVar("F")

# Sentinel for faster Ok/Err construction
_OK = True
_ERR = False


class Result(Generic[T, E]):
    """Discriminated union representing success (Ok) or failure (Err).

    Examples:
        >>> Ok(42).map(lambda x: x * 2).unwrap()
        84
        >>> Err("fail").context("loading").unwrap_err().format()
        'loading: fail'
    """

    __slots__ = ("_value", "_is_ok")
    __match_args__ = ("_value",)

    def __init__(self, value: T | E, is_ok: bool) -> None:
        self._value = value
        self._is_ok = is_ok

    # ─── Type Checking ───────────────────────────────────────────────

    def is_ok(self) -> bool:
        return self._is_ok

    def is_err(self) -> bool:
        return not self._is_ok

    # ─── Value Extraction ────────────────────────────────────────────

    def unwrap(self) -> T:
        """Extract Ok value. Raises the error itself if it is an exception, RuntimeError otherwise."""
        if self._is_ok:
            return self._value  # type: ignore[return-value]
        if isinstance(self._value, BaseException):
            raise self._value
        raise RuntimeError(f"unwrap() on Err: {self._value}")

    def unwrap_err(self) -> E:
        """Extract Err value. Raises RuntimeError on Ok."""
        if not self._is_ok:
            return self._value  # type: ignore[return-value]
        raise RuntimeError(f"unwrap_err() on Ok: {self._value}")

    def unwrap_or(self, default: T) -> T:
        return self._value if self._is_ok else default  # type: ignore[return-value]

    def unwrap_or_else(self, f: Callable[[E], T]) -> T:
        """Extract Ok value or compute from error via f."""
        return self._value if self._is_ok else f(self._value)  # type: ignore[return-value,arg-type]

    def ok(self) -> T | None:
        return self._value if self._is_ok else None  # type: ignore[return-value]

    def err(self) -> E | None:
        return self._value if not self._is_ok else None  # type: ignore[return-value]

    # ─── Functor / Monad ─────────────────────────────────────────────

    def map(self, f: Callable[[T], U]) -> Result[U, E]:
        """Apply f to Ok value. Signature: Result[T,E] → (T→U) → Result[U,E]"""
        return Result(f(self._value), _OK) if self._is_ok else self  # type: ignore[arg-type,return-value]

    def map_err(self, f: Callable[[E], F]) -> Result[T, F]:
        """Apply f to Err value. Signature: Result[T,E] → (E→F) → Result[T,F]"""
        return Result(f(self._value), _ERR) if not self._is_ok else self  # type: ignore[arg-type,return-value]

    def and_then(self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Monadic bind (>>=). Chain operations that can fail."""
        return f(self._value) if self._is_ok else self  # type: ignore[arg-type,return-value]

    flat_map = and_then

    def or_else(self, f: Callable[[E], Result[T, F]]) -> Result[T, F]:
        """On Err, apply f to recover. On Ok, pass through."""
        return f(self._value) if not self._is_ok else self  # type: ignore[arg-type,return-value]

    def match(self, *, ok: Callable[[T], U], err: Callable[[E], U]) -> U:
        """Exhaustive pattern match. Forces handling both Ok and Err."""
        return ok(self._value) if self._is_ok else err(self._value)  # type: ignore[arg-type]

    # ─── Error Annotation ────────────────────────────────────────────

    def context(self, message: object) -> Result[T, ApiError]:
        """On Err, convert to ApiError and append ``message`` as the newest layer."""
        if self._is_ok:
            return self  # type: ignore[return-value]
        return Result(into_api_error(self._value).context(message), _ERR)

    def with_context(self, f: MessageFn) -> Result[T, ApiError]:
        """Like ``context`` but ``f`` builds the message, and only on Err."""
        if self._is_ok:
            return self  # type: ignore[return-value]
        return Result(into_api_error(self._value).context(f()), _ERR)

    def with_category(self, category: Category) -> Result[T, ApiError]:
        """On Err, convert to ApiError and set its category (last write wins)."""
        if self._is_ok:
            return self  # type: ignore[return-value]
        return Result(into_api_error(self._value).with_category(category), _ERR)

    def bad_request(self) -> Result[T, ApiError]:
        return self.with_category(BAD_REQUEST)

    # ─── Dunder Methods ──────────────────────────────────────────────

    __bool__ = lambda self: self._is_ok  # noqa: E731
    __repr__ = lambda self: f"{'Ok' if self._is_ok else 'Err'}({self._value!r})"  # noqa: E731
    __str__ = __repr__

    def __eq__(self, other: object) -> bool:
        return self._is_ok == other._is_ok and self._value == other._value if isinstance(other, Result) else NotImplemented

    def __hash__(self) -> int:
        return hash((self._is_ok, self._value))


# ═══════════════════════════════════════════════════════════════════════════════
# Constructors
# ═══════════════════════════════════════════════════════════════════════════════


def Ok(value: T) -> Result[T, E]:  # noqa: N802
    """Construct Ok variant (success)."""
    return Result(value, _OK)


def Err(error: E) -> Result[T, E]:  # noqa: N802
    """Construct Err variant (failure)."""
    return Result(error, _ERR)


def try_fn(f: Callable[..., T], *args: object, **kwargs: object) -> Result[T, Exception]:
    """Call ``f``, capturing any raised Exception as Err.

    Example:
        >>> try_fn(int, "foo").bad_request().unwrap_err().category
        BadRequest()
    """
    try:
        return Result(f(*args, **kwargs), _OK)
    except Exception as e:
        return Result(e, _ERR)


class Option(Generic[T]):
    """An optional value that becomes a Result once a context message is given.

    ``None`` is the missing case. ``context``/``with_context`` turn a missing
    value into a fresh single-layer ``ApiError`` with no category.

    Example:
        >>> Option.of(None).context("Input too large").bad_request().unwrap_err().format()
        'Input too large'
    """

    __slots__ = ("_value",)

    def __init__(self, value: T | None) -> None:
        self._value = value

    @classmethod
    def of(cls, value: T | None) -> Option[T]:
        return cls(value)

    def is_some(self) -> bool:
        return self._value is not None

    def is_none(self) -> bool:
        return self._value is None

    def context(self, message: object) -> Result[T, ApiError]:
        if self._value is not None:
            return Result(self._value, _OK)
        return Result(ApiError.msg(message), _ERR)

    def with_context(self, f: MessageFn) -> Result[T, ApiError]:
        if self._value is not None:
            return Result(self._value, _OK)
        return Result(ApiError.msg(f()), _ERR)

    def __repr__(self) -> str:
        return f"Option({self._value!r})"
