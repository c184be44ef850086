"""Record building: rows to header-keyed dicts."""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from .models import ParseConfig
from .rules import SYNTHETIC_HEADER_PREFIX
from .tokenizer import Row, tokenize

Record = Dict[str, str]


def synthesize_headers(rows: Sequence[Row]) -> List[str]:
    """``field1..fieldN`` where N is the widest row."""
    width = max((len(row) for row in rows), default=0)
    return [f"{SYNTHETIC_HEADER_PREFIX}{index}" for index in range(1, width + 1)]


def build_records(rows: Sequence[Row], has_header: bool = True) -> List[Record]:
    """
    Map each data row onto the header names.

    Rules:
    - With a header, the first row supplies the names as-is (a later
      duplicate name overwrites the earlier value in the record).
    - Without one, names are synthesized from the widest row.
    - Short rows are padded with empty strings; extra fields are dropped.
    """
    if not rows:
        return []

    if has_header:
        headers = list(rows[0])
        data_rows = rows[1:]
    else:
        headers = synthesize_headers(rows)
        data_rows = rows

    records: List[Record] = []
    for row in data_rows:
        record: Record = {}
        for index, name in enumerate(headers):
            record[name] = row[index] if index < len(row) else ""
        records.append(record)
    return records


def parse(text: str, config: Optional[ParseConfig] = None) -> List[Record]:
    """Tokenize ``text`` and build its records in one call."""
    config = config or ParseConfig()
    return build_records(tokenize(text, config), has_header=config.has_header)
