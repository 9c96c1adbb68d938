from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from dicer.core.errors import IndexOutOfBounds, PreconditionError, UnterminatedExpression


@dataclass(frozen=True)
class Selector:
    position: int = 0
    last: bool = False  # "$"
    remove: bool = False  # leading "-"

    def resolve(self, segment_count: int) -> int:
        return segment_count if self.last else self.position

    def __str__(self) -> str:
        body = "$" if self.last else str(self.position)
        return f"-{body}" if self.remove else body


@dataclass(frozen=True)
class Operation:
    delimiter: str
    selector: Selector

    def __str__(self) -> str:
        return f"{self.delimiter}{self.selector}"


@dataclass(frozen=True)
class LiteralRun:
    text: str


@dataclass(frozen=True)
class SimpleReference:
    index: int
    position: int  # 1-based char of the "%"


@dataclass(frozen=True)
class DiceExpression:
    index: int
    position: int
    source: str  # bracket contents
    operations: tuple[Operation, ...] = ()


Token = Union[LiteralRun, SimpleReference, DiceExpression]


@dataclass(frozen=True)
class Ok:
    output: str


ExpandResult = Union[Ok, PreconditionError, UnterminatedExpression, IndexOutOfBounds]
