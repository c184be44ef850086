"""Quote-aware line segmentation for line-oriented consumers."""

from __future__ import annotations

from typing import Iterator, List

from .rules import QUOTE


def split_lines(text: str) -> Iterator[str]:
    """Yield logical lines from ``text``, keeping quoted line breaks inside.

    An unquoted ``\\n``, ``\\r`` or ``\\r\\n`` ends a line. Inside quotes a
    doubled quote is an escape and contributes a single quote. Blank lines
    are skipped; everything else is yielded untrimmed.
    """
    current: List[str] = []
    in_quotes = False
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == QUOTE:
            if in_quotes and i + 1 < n and text[i + 1] == QUOTE:
                i += 1
            else:
                in_quotes = not in_quotes
            current.append(QUOTE)
        elif ch in "\r\n" and not in_quotes:
            if ch == "\r" and i + 1 < n and text[i + 1] == "\n":
                i += 1
            line = "".join(current)
            if line.strip():
                yield line
            current = []
        else:
            current.append(ch)
        i += 1

    line = "".join(current)
    if line.strip():
        yield line
