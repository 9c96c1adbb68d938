from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional


@dataclass(unsafe_hash=True)
class DicerError(Exception):
    """Base for expansion failures.

    Each kind carries the data needed to render its message; ``str(err)`` is the
    caller-visible message and must stay byte-for-byte stable. Not frozen:
    propagation (contextlib, traceback chaining) assigns ``__traceback__``.
    """

    code: ClassVar[str] = "E_DICER"

    @property
    def message(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.message


@dataclass(unsafe_hash=True)
class PreconditionError(DicerError):
    code: ClassVar[str] = "E_NO_INPUTS"

    @property
    def message(self) -> str:
        return "at least one input must be specified"


@dataclass(unsafe_hash=True)
class UnterminatedExpression(DicerError):
    position: int

    code: ClassVar[str] = "E_UNTERMINATED_EXPRESSION"

    @property
    def message(self) -> str:
        return f"char {self.position}: dicer expression missing closing ]"


@dataclass(unsafe_hash=True)
class IndexOutOfBounds(DicerError):
    index: int
    size: int

    code: ClassVar[str] = "E_INDEX_OUT_OF_BOUNDS"

    @property
    def message(self) -> str:
        return f"index {self.index}: out of bounds (inputs size {self.size})"


@dataclass(unsafe_hash=True)
class LoadError(Exception):
    """Envelope for problems outside the engine (files, patterns, template names)."""

    code: str
    message: str
    file: Optional[str] = None
    path: Optional[str] = None

    def __str__(self) -> str:
        parts: list[str] = []
        if self.file:
            parts.append(self.file)
        if self.path:
            parts.append(self.path)
        loc = ":".join(parts) if parts else "<dicer>"
        return f"{loc}: {self.code}: {self.message}"
