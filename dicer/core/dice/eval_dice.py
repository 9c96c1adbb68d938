from __future__ import annotations

from typing import Optional, Sequence, Union

from dicer.core.errors import IndexOutOfBounds
from dicer.core.model import DiceExpression, Operation, SimpleReference


def resolve_index(index: int, inputs: Sequence[str]) -> tuple[Optional[str], Optional[IndexOutOfBounds]]:
    """Look up a 1-based input index."""
    if index < 1 or index > len(inputs):
        return None, IndexOutOfBounds(index=index, size=len(inputs))
    return inputs[index - 1], None


def apply_operation(value: str, op: Operation) -> str:
    """Apply one delimiter/selector step to the running value.

    Selecting past the end yields "", removing past the end changes nothing.
    Neither is an error.
    """

    segments = value.split(op.delimiter)
    p = op.selector.resolve(len(segments))
    in_range = 1 <= p <= len(segments)

    if op.selector.remove:
        if in_range:
            del segments[p - 1]
        return op.delimiter.join(segments)

    return segments[p - 1] if in_range else ""


def evaluate(
    ref: Union[SimpleReference, DiceExpression], inputs: Sequence[str]
) -> tuple[Optional[str], Optional[IndexOutOfBounds]]:
    value, err = resolve_index(ref.index, inputs)
    if err is not None or value is None:
        return None, err

    if isinstance(ref, DiceExpression):
        for op in ref.operations:
            value = apply_operation(value, op)
    return value, None
