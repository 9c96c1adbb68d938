from __future__ import annotations

import logging
from typing import Sequence

from dicer.core.dice.eval_dice import evaluate
from dicer.core.errors import DicerError, PreconditionError
from dicer.core.model import ExpandResult, LiteralRun, Ok
from dicer.core.scan.scan_template import has_real_reference, normalize, scan_template


logger = logging.getLogger(__name__)


def expand_result(template: str, inputs: Sequence[str]) -> ExpandResult:
    """Expand ``template`` against ``inputs`` (1-indexed).

    Returns Ok(output) or one of PreconditionError, UnterminatedExpression,
    IndexOutOfBounds. Nothing is raised and no partial output is returned.
    """

    if not inputs:
        return PreconditionError()

    has_ref = has_real_reference(template)
    normalized = normalize(template, has_ref)
    if not has_ref:
        logger.debug("no reference in template %r, expanding %r", template, normalized)

    tokens, err = scan_template(normalized)
    if err is not None:
        return err

    out: list[str] = []
    for tok in tokens:
        if isinstance(tok, LiteralRun):
            out.append(tok.text)
            continue
        value, lookup_err = evaluate(tok, inputs)
        if lookup_err is not None:
            return lookup_err
        logger.debug("char %d: %r -> %r", tok.position, tok, value)
        out.append(value or "")

    return Ok("".join(out))


def expand(template: str, inputs: Sequence[str]) -> str:
    """Like expand_result, but raises the DicerError instead of returning it."""
    result = expand_result(template, inputs)
    if isinstance(result, DicerError):
        raise result
    return result.output
