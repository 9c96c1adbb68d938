from __future__ import annotations

from typing import Optional, Union

from dicer.core.dice.parse_dice import parse_dice_expression
from dicer.core.errors import UnterminatedExpression
from dicer.core.model import DiceExpression, LiteralRun, SimpleReference, Token
from dicer.core.scan.cursor import Cursor, is_digit


DEFAULT_REFERENCE = "%1"


def has_real_reference(template: str) -> bool:
    """True when the template holds a ``%N`` or ``%[`` outside a ``%%`` escape."""
    cur = Cursor(template)
    while not cur.at_end():
        if cur.advance() != "%":
            continue
        nxt = cur.peek()
        if nxt == "[" or is_digit(nxt):
            return True
        if nxt is not None:
            # "%%" and "%q" both swallow the following char.
            cur.advance()
    return False


def normalize(template: str, has_reference: bool) -> str:
    """Append a reference to input 1 when the template has none of its own."""
    if has_reference:
        return template
    if not template:
        return DEFAULT_REFERENCE
    return f"{template} {DEFAULT_REFERENCE}"


def scan_template(template: str) -> tuple[list[Token], Optional[UnterminatedExpression]]:
    """Split a template into literal runs and placeholder tokens.

    Returns (tokens, error). Tokens are empty when an error is returned.
    Adjacent literal text is merged into a single LiteralRun.
    """

    cur = Cursor(template)
    tokens: list[Token] = []
    literal: list[str] = []

    while not cur.at_end():
        piece = _parse_piece(cur)
        if isinstance(piece, UnterminatedExpression):
            return [], piece
        if isinstance(piece, str):
            literal.append(piece)
            continue
        if literal:
            tokens.append(LiteralRun("".join(literal)))
            literal = []
        tokens.append(piece)

    if literal:
        tokens.append(LiteralRun("".join(literal)))
    return tokens, None


def _parse_piece(
    cur: Cursor,
) -> Union[str, SimpleReference, DiceExpression, UnterminatedExpression]:
    if cur.peek() != "%":
        return cur.advance()
    return _parse_percent(cur)


def _parse_percent(
    cur: Cursor,
) -> Union[str, SimpleReference, DiceExpression, UnterminatedExpression]:
    start = cur.position
    cur.advance()  # "%"
    nxt = cur.peek()

    if nxt is None:
        return "%"
    if nxt == "%":
        cur.advance()
        return "%"
    if is_digit(nxt):
        return SimpleReference(index=int(cur.take_digits()), position=start)
    if nxt == "[":
        return _parse_bracket(cur, start)

    return "%" + cur.advance()


def _parse_bracket(cur: Cursor, start: int) -> Union[DiceExpression, UnterminatedExpression]:
    cur.advance()  # "["
    contents = cur.take_until("]")
    if contents is None:
        return UnterminatedExpression(position=start)
    return parse_dice_expression(contents, position=start)
