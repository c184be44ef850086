"""
Character-level tokenizer for tolerant CSV.

Responsibilities:
- BOM removal + line ending normalization
- quote tracking across delimiters and newlines
- comment line and blank line suppression
- best-effort recovery from malformed input (never raises)

The state machine is split in two: ``step`` is a pure transition function
from (mode, char, lookahead) to a ``Step``; ``tokenize`` drives it and owns the
field/row accumulators.
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import List, NamedTuple, Optional, Sequence

from .models import ParseConfig
from .rules import BOM, NEWLINE, NUL, QUOTE

logger = logging.getLogger(__name__)

Row = List[str]


class ParserMode(Enum):
    AT_LINE_START = auto()
    DEFAULT = auto()
    IN_QUOTED_FIELD = auto()
    IN_COMMENT = auto()


class Action(Enum):
    APPEND = auto()
    END_FIELD = auto()
    END_ROW = auto()
    SKIP = auto()


class Step(NamedTuple):
    mode: ParserMode
    action: Action
    text: str = ""
    consumed: int = 1


def normalize_text(text: str) -> str:
    """Drop a leading BOM and fold CRLF/CR line endings into LF."""
    if text.startswith(BOM):
        text = text[1:]
    # CRLF first so a CRLF pair does not become two newlines
    return text.replace("\r\n", NEWLINE).replace("\r", NEWLINE)


def step(
    mode: ParserMode,
    char: str,
    lookahead: Optional[str],
    field_empty: bool,
    config: ParseConfig,
) -> Step:
    """Return the transition for ``char`` read in ``mode``.

    ``lookahead`` is the next character (None at end of input) and
    ``field_empty`` tells whether the current field buffer holds anything.
    """
    if mode is ParserMode.IN_COMMENT:
        if char == NEWLINE:
            return Step(ParserMode.AT_LINE_START, Action.SKIP)
        return Step(ParserMode.IN_COMMENT, Action.SKIP)

    if mode is ParserMode.IN_QUOTED_FIELD:
        if char == QUOTE:
            if lookahead == QUOTE:
                return Step(ParserMode.IN_QUOTED_FIELD, Action.APPEND, QUOTE, 2)
            return Step(ParserMode.DEFAULT, Action.APPEND, QUOTE)
        # newlines, delimiters and NUL are all literal here
        return Step(ParserMode.IN_QUOTED_FIELD, Action.APPEND, char)

    if mode is ParserMode.AT_LINE_START and char == config.comment_char:
        return Step(ParserMode.IN_COMMENT, Action.SKIP)
    if char == config.delimiter:
        return Step(ParserMode.DEFAULT, Action.END_FIELD)
    if char == NEWLINE or char == NUL:
        return Step(ParserMode.AT_LINE_START, Action.END_ROW)
    if char == QUOTE and field_empty:
        return Step(ParserMode.IN_QUOTED_FIELD, Action.APPEND, QUOTE)
    # includes a quote in the middle of an unquoted field
    return Step(ParserMode.DEFAULT, Action.APPEND, char)


def finalize_field(raw: str, in_quotes: bool, trim: bool) -> str:
    """Turn a raw field buffer into the field's value."""
    if not in_quotes and trim:
        raw = raw.strip()
    if len(raw) >= 2 and raw.startswith(QUOTE) and raw.endswith(QUOTE):
        raw = raw[1:-1].replace(QUOTE * 2, QUOTE)
    return raw


def keep_row(row: Sequence[str], comment_char: str) -> bool:
    """False for blank rows and rows whose first field opens a comment."""
    if len(row) == 1 and not row[0].strip():
        return False
    if row and row[0].strip().startswith(comment_char):
        return False
    return True


def tokenize(text: str, config: Optional[ParseConfig] = None) -> List[Row]:
    """Split ``text`` into rows of field strings.

    Total over any string: malformed input is absorbed by the recovery
    rules in ``step`` rather than reported.
    """
    config = config or ParseConfig()
    data = normalize_text(text)

    rows: List[Row] = []
    row: Row = []
    field: List[str] = []
    mode = ParserMode.AT_LINE_START

    def push_field() -> None:
        row.append(
            finalize_field("".join(field), mode is ParserMode.IN_QUOTED_FIELD, config.trim)
        )
        field.clear()

    def push_row() -> None:
        nonlocal row
        if keep_row(row, config.comment_char):
            rows.append(row)
        row = []

    i = 0
    n = len(data)
    while i < n:
        lookahead = data[i + 1] if i + 1 < n else None
        result = step(mode, data[i], lookahead, not field, config)
        if result.action is Action.APPEND:
            field.append(result.text)
        elif result.action is Action.END_FIELD:
            push_field()
        elif result.action is Action.END_ROW:
            push_field()
            push_row()
        mode = result.mode
        i += result.consumed

    unterminated = mode is ParserMode.IN_QUOTED_FIELD

    # --- End of input: keep a trailing record with no final newline ---
    if field or row:
        push_field()
        push_row()

    while rows and len(rows[-1]) == 1 and rows[-1][0] == "":
        rows.pop()

    logger.debug(
        "tokenized %d chars into %d rows (unterminated quote: %s)",
        len(data),
        len(rows),
        unterminated,
    )
    return rows
