"""The error value carried up the call stack: a cause chain plus an optional category.

Native exceptions enter through ``ApiError.wrap`` (or ``into_api_error``, which
every ``Result`` combinator uses). From then on the error is only extended:
context layers are appended and a category is set or overwritten. Errors
without a category map to the "internal error" status of every protocol.

Example:
    >>> try:
    ...     int("foo")
    ... except ValueError as e:
    ...     err = ApiError.wrap(e).bad_request().context("reading limit")
    >>> err.category
    BadRequest()
    >>> err.http_status()
    400
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Self

from .category import BAD_REQUEST, Category
from .chain import CauseChain, exception_links

if TYPE_CHECKING:
    from collections.abc import Iterator

    from .types import MessageFn


class ApiError(Exception):
    """Exception holding a ``CauseChain`` and at most one ``Category``.

    Combinators mutate this error and return it: an ``ApiError`` has a single
    owner, the code currently propagating it. Attaching context never touches
    the category; attaching a category never touches the chain.
    """

    __slots__ = ("_chain", "_category")

    def __init__(self, chain: CauseChain, category: Category | None = None) -> None:
        self._chain = chain
        self._category = category
        super().__init__(chain.message)

    def __reduce__(self) -> tuple[type[ApiError], tuple[CauseChain, Category | None]]:
        return type(self), (self._chain, self._category)

    @classmethod
    def wrap(cls, exc: BaseException) -> ApiError:
        """Bring a native exception into the system.

        An ``ApiError`` is returned unchanged. The wrapped exception is kept as
        ``__cause__`` so tracebacks still show where it came from. If an
        ``ApiError`` sits in its cause links, its layers and category carry over.
        """
        if isinstance(exc, ApiError):
            return exc
        from api_err.config import get_settings
        inner = next((e for e in exception_links(exc) if isinstance(e, ApiError)), None)
        err = cls(
            CauseChain.from_exception(exc, include_details=get_settings().capture_tracebacks),
            inner.category if inner is not None else None,
        )
        err.__cause__ = exc
        return err

    @classmethod
    def msg(cls, message: object) -> ApiError:
        """Fresh error whose chain is the single layer ``message``."""
        return cls(CauseChain.from_message(message))

    # ─── Accessors ───────────────────────────────────────────────────

    @property
    def category(self) -> Category | None:
        """The error's category, if one was attached."""
        return self._category

    @property
    def chain(self) -> CauseChain:
        return self._chain

    def into_chain(self) -> CauseChain:
        """Drop the category and keep only the cause chain."""
        return self._chain

    # ─── Context ─────────────────────────────────────────────────────

    def context(self, message: object) -> Self:
        """Append ``message`` as the newest layer of the chain."""
        self._chain = self._chain.with_context(message)
        self.args = (self._chain.message,)
        return self

    def with_context(self, f: MessageFn) -> Self:
        return self.context(f())

    # ─── Category ────────────────────────────────────────────────────

    def with_category(self, category: Category) -> Self:
        """Set the category, replacing any previous one."""
        self._category = category
        return self

    def bad_request(self) -> Self:
        return self.with_category(BAD_REQUEST)

    # ─── Protocol status ─────────────────────────────────────────────

    def status_code(self, protocol: str) -> int:
        """Status code for ``protocol`` among the enabled mappers.

        Raises:
            ProtocolNotEnabled: ``protocol`` is switched off in configuration
        """
        from api_err.protocols import get_registry
        return get_registry().status_code(protocol, self._category)

    def http_status(self) -> int:
        """The HTTP status code that best corresponds to this error's category."""
        return self.status_code("http")

    def json_rpc_status(self) -> int:
        """The JSON-RPC error code that best corresponds to this error's category."""
        return self.status_code("json_rpc")

    # ─── Rendering ───────────────────────────────────────────────────

    def format(self, *, verbose: bool = False, include_details: bool = False) -> str:
        """Render the full chain. See ``CauseChain.format``."""
        return self._chain.format(verbose=verbose, include_details=include_details)

    def __str__(self) -> str:
        return self._chain.message

    def __repr__(self) -> str:
        return f"ApiError({self._chain.message!r}, category={self._category!r})"


def into_api_error(error: object) -> ApiError:
    """Convert an error value into an ``ApiError``.

    Accepts an ``ApiError`` (returned as is), any exception (wrapped) or a
    string (single-layer error). Other values are a programming error.
    """
    if isinstance(error, ApiError):
        return error
    if isinstance(error, BaseException):
        return ApiError.wrap(error)
    if isinstance(error, str):
        return ApiError.msg(error)
    raise TypeError(f"Cannot convert {type(error).__name__} into ApiError")


@contextmanager
def categorize(
    category: Category,
    *,
    context: object | None = None,
    on: tuple[type[Exception], ...] = (Exception,),
) -> Iterator[None]:
    """Re-raise exceptions from the block as an ``ApiError`` carrying ``category``.

    Usable as a context manager or a decorator. ``context``, if given, is
    appended after the category is set. Exceptions not matching ``on``
    propagate untouched.

    Example:
        >>> with categorize(BAD_REQUEST, context="parsing limit"):
        ...     int("foo")
        Traceback (most recent call last):
        ...
        api_err.errors.errors.ApiError: parsing limit
    """
    try:
        yield
    except on as exc:
        err = ApiError.wrap(exc).with_category(category)
        if context is not None:
            err.context(context)
        if err is exc:
            raise
        raise err from exc
