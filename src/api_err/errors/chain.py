"""Cause chains: an original failure plus the context layered on top of it.

A chain is immutable. ``root`` is the deepest layer (the original failure);
``contexts`` holds every later layer in insertion order. All renderings list
the shallowest (newest) layer first:

    >>> c = CauseChain.from_message("disk full").with_context("saving report")
    >>> c.layers()
    ('saving report', 'disk full')
    >>> str(c)
    'saving report'
    >>> c.format()
    'saving report: disk full'
"""

from __future__ import annotations

import traceback
from io import StringIO
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from .types import JsonDict

# Threshold for using StringIO in format() (improves performance for long chains)
_FORMAT_STRINGIO_THRESHOLD = 10

# Pre-allocated empty tuple for fresh chains (single allocation)
_EMPTY_CONTEXTS: tuple[str, ...] = ()

# Root layer used when a failure has no message of its own
_UNKNOWN_ROOT = "unknown error"


def _describe(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__


def exception_links(exc: BaseException) -> list[BaseException]:
    """Exception followed by its causes, outermost first. Stops on cycles."""
    seen: set[int] = set()
    out: list[BaseException] = []
    cur: BaseException | None = exc
    while cur is not None and id(cur) not in seen:
        seen.add(id(cur))
        out.append(cur)
        cur = cur.__cause__ or (None if cur.__suppress_context__ else cur.__context__)
    return out


class CauseChain(BaseModel):
    """Ordered layers of explanation, deepest-first in storage, newest-first when rendered."""

    model_config = ConfigDict(
        frozen=True, extra="forbid", revalidate_instances="never",
        json_schema_extra={"title": "Cause Chain", "description": "Original failure plus layered context"},
    )

    root: Annotated[str, Field(min_length=1)]
    contexts: tuple[str, ...] = _EMPTY_CONTEXTS
    origin: str | None = Field(default=None, description="Type name of the wrapped exception")
    details: str | None = Field(default=None, repr=False)  # Often verbose, hide from repr

    @classmethod
    def from_message(cls, message: object) -> CauseChain:
        """Single-layer chain from a plain message. An empty message becomes ``"unknown error"``."""
        return cls.model_construct(
            root=str(message) or _UNKNOWN_ROOT, contexts=_EMPTY_CONTEXTS, origin=None, details=None,
        )

    @classmethod
    def from_exception(cls, exc: BaseException, *, include_details: bool = False) -> CauseChain:
        """Chain from an exception, folding in its ``__cause__``/``__context__`` links.

        The deepest linked exception becomes ``root``; each exception above it
        becomes a context layer. A linked exception that already carries a
        chain (an ``ApiError``) contributes all of its layers, and the walk
        stops there.
        """
        layers: list[str] = []
        for linked in exception_links(exc):
            chain = getattr(linked, "chain", None)
            if isinstance(chain, CauseChain):
                layers.extend(chain.layers())
                break
            layers.append(_describe(linked))
        messages = layers[::-1]
        return cls.model_construct(
            root=messages[0],
            contexts=tuple(messages[1:]),
            origin=type(exc).__name__,
            details="".join(traceback.format_exception(exc)) if include_details else None,
        )

    @property
    def depth(self) -> int:
        """Number of layers, root included."""
        return len(self.contexts) + 1

    @property
    def message(self) -> str:
        """Newest layer."""
        return self.contexts[-1] if self.contexts else self.root

    def with_context(self, message: object) -> CauseChain:
        """New chain with ``message`` as the newest layer."""
        return CauseChain.model_construct(
            root=self.root,
            contexts=(*self.contexts, str(message)),
            origin=self.origin,
            details=self.details,
        )

    def layers(self) -> tuple[str, ...]:
        """All layers, newest first."""
        return (*reversed(self.contexts), self.root)

    def __contains__(self, message: object) -> bool:
        return message == self.root or message in self.contexts

    def __hash__(self) -> int:
        return hash((self.root, self.contexts, self.origin))

    def format(self, *, verbose: bool = False, include_details: bool = False) -> str:
        """Render the chain.

        Compact form joins every layer with ``": "``. Verbose form puts the
        newest message on the first line followed by a numbered ``Caused by:``
        list. ``include_details`` appends the captured traceback, if any.
        """
        if not verbose:
            out = ": ".join(self.layers())
        elif not self.contexts:
            out = self.root
        elif len(self.contexts) > _FORMAT_STRINGIO_THRESHOLD:
            out = self._format_large()
        else:
            causes = self.layers()[1:]
            out = f"{self.message}\n\nCaused by:\n" + "\n".join(f"    {i}: {c}" for i, c in enumerate(causes))
        if include_details and self.details:
            out = f"{out}\n\nDetails:\n{self.details}"
        return out

    def _format_large(self) -> str:
        buf = StringIO()
        buf.write(self.message)
        buf.write("\n\nCaused by:")
        for i, cause in enumerate(self.layers()[1:]):
            buf.write(f"\n    {i}: {cause}")
        return buf.getvalue()

    def __str__(self) -> str:
        return self.message


_CauseChainAdapter: TypeAdapter[CauseChain] = TypeAdapter(CauseChain)


def validate_chain(data: JsonDict) -> CauseChain:
    """Validate dict as CauseChain (use when loading serialized errors)."""
    return _CauseChainAdapter.validate_python(data)
