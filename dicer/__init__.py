from dicer.core.errors import (
    DicerError,
    IndexOutOfBounds,
    LoadError,
    PreconditionError,
    UnterminatedExpression,
)
from dicer.core.expand.expand_template import expand, expand_result
from dicer.core.model import ExpandResult, Ok

__all__ = [
    "DicerError",
    "ExpandResult",
    "IndexOutOfBounds",
    "LoadError",
    "Ok",
    "PreconditionError",
    "UnterminatedExpression",
    "expand",
    "expand_result",
]
