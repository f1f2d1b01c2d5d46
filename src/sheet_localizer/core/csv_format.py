# SPDX-License-Identifier: Apache-2.0
"""Line-level CSV tokenizing and escaping.

Fields are split one physical line at a time. A quoted field cannot span
lines; an unterminated quote simply runs to the end of its line.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from enum import Enum

QUOTE = '"'
SEPARATOR = ","

# Characters that force a cell to be quoted when escaping
_SPECIAL_CHARS = (SEPARATOR, QUOTE, "\n")


class _State(Enum):
    UNQUOTED = "unquoted"
    QUOTED = "quoted"
    QUOTE_PENDING = "quote_pending"


def tokenize_line(line: str) -> list[str]:
    """Split one CSV line into fields.

    ``"`` opens or closes quoting. Inside a quoted field, ``""`` decodes to
    a literal quote. ``,`` separates fields only outside quotes. Everything
    else is copied verbatim, including surrounding whitespace.

    Args:
        line: A single line without its line terminator.

    Returns:
        Field values. An empty line yields a single empty field.
    """
    fields: list[str] = []
    current: list[str] = []
    state = _State.UNQUOTED

    for char in line:
        if state is _State.QUOTE_PENDING:
            if char == QUOTE:
                current.append(QUOTE)
                state = _State.QUOTED
                continue
            # The pending quote closed the quoted run
            state = _State.UNQUOTED

        if state is _State.QUOTED:
            if char == QUOTE:
                state = _State.QUOTE_PENDING
            else:
                current.append(char)
        elif char == QUOTE:
            state = _State.QUOTED
        elif char == SEPARATOR:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)

    fields.append("".join(current))
    return fields


def escape_cell(value: str) -> str:
    """Quote ``value`` if it contains a comma, quote or newline."""
    if any(char in value for char in _SPECIAL_CHARS):
        return QUOTE + value.replace(QUOTE, QUOTE * 2) + QUOTE
    return value


def rows_to_csv(rows: Iterable[Sequence[str]]) -> str:
    """Join rows of cells into CSV text using :func:`escape_cell`."""
    return "\n".join(
        SEPARATOR.join(escape_cell(str(cell)) for cell in row) for row in rows
    )
