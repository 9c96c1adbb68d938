from __future__ import annotations

import logging
import re
import sys
from pathlib import Path
from typing import Iterable, Iterator, Optional

from dicer.core.errors import LoadError


logger = logging.getLogger(__name__)


def compile_pattern(pattern: str) -> re.Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as e:
        raise LoadError(code="E_BAD_PATTERN", message=str(e), path="regex") from e


def capture_inputs(pattern: re.Pattern[str], line: str) -> Optional[list[str]]:
    """Turn the first match in ``line`` into an input list.

    Capture groups become inputs in order; groups that did not participate
    become "". A pattern without groups yields the whole match. Returns None
    when the line does not match.
    """
    m = pattern.search(line)
    if m is None:
        return None
    if pattern.groups == 0:
        return [m.group(0)]
    return [g if g is not None else "" for g in m.groups()]


def iter_line_inputs(
    pattern: re.Pattern[str], lines: Iterable[str]
) -> Iterator[tuple[int, list[str]]]:
    """Yield (1-based line number, inputs) for every matching line."""
    for lineno, line in enumerate(lines, start=1):
        inputs = capture_inputs(pattern, line)
        if inputs is None:
            logger.debug("line %d: no match, skipped", lineno)
            continue
        yield lineno, inputs


def read_lines(path: str) -> list[str]:
    """Read ``path`` (``-`` for stdin) into lines without line terminators."""
    if path == "-":
        return sys.stdin.read().splitlines()

    p = Path(path)
    if not p.exists():
        raise LoadError(code="E_FILE_NOT_FOUND", message="file does not exist", file=str(p))
    try:
        return p.read_text(encoding="utf-8").splitlines()
    except (OSError, UnicodeDecodeError) as e:
        raise LoadError(code="E_FILE_READ", message=str(e), file=str(p)) from e
