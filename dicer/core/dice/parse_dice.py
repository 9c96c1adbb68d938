from __future__ import annotations

from dicer.core.model import DiceExpression, Operation, Selector
from dicer.core.scan.cursor import Cursor


def parse_dice_expression(source: str, position: int = 1) -> DiceExpression:
    """Parse the contents of a ``%[...]`` expression.

    Grammar (greedy, positional):

      expr      := index operation*
      index     := digit+
      operation := delimiter selector
      delimiter := any single character
      selector  := "-"? ( digit+ | "$" )

    Parsing never fails. A missing index or selector reads as 0, which the
    evaluator treats as out of range.
    """

    cur = Cursor(source)
    index = _to_int(cur.take_digits())

    operations: list[Operation] = []
    while not cur.at_end():
        delimiter = cur.advance()
        operations.append(Operation(delimiter=delimiter, selector=_parse_selector(cur)))

    return DiceExpression(
        index=index,
        position=position,
        source=source,
        operations=tuple(operations),
    )


def _parse_selector(cur: Cursor) -> Selector:
    remove = cur.accept("-")
    if cur.accept("$"):
        return Selector(last=True, remove=remove)
    return Selector(position=_to_int(cur.take_digits()), remove=remove)


def _to_int(digits: str) -> int:
    return int(digits) if digits else 0
