from __future__ import annotations

from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .rules import (
    DEFAULT_COMMENT_CHAR,
    DEFAULT_DELIMITER,
    DEFAULT_HAS_HEADER,
    DEFAULT_TRIM,
    RESERVED_CHARS,
)


class ParseConfig(BaseModel):
    """Dialect options for a single parse call."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    delimiter: str = Field(default=DEFAULT_DELIMITER, min_length=1, max_length=1)
    comment_char: str = Field(default=DEFAULT_COMMENT_CHAR, min_length=1, max_length=1)
    has_header: bool = DEFAULT_HAS_HEADER
    trim: bool = DEFAULT_TRIM

    @field_validator("delimiter", "comment_char")
    @classmethod
    def _not_reserved(cls, value: str) -> str:
        if value in RESERVED_CHARS:
            raise ValueError(f"{value!r} is reserved by the tokenizer")
        return value


class EncodingReport(BaseModel):
    detected: Optional[str] = None
    decode_used: str
    decode_fallback: bool = False


class ParseSummary(BaseModel):
    rows: int = 0
    records: Optional[int] = Field(default=None, examples=[None])
    columns: Optional[int] = Field(default=None, examples=[None])
    ragged_rows: int = 0


class RowsResponse(BaseModel):
    rows: List[List[str]] = Field(default_factory=list)
    summary: ParseSummary
    encoding: EncodingReport


class ParseResponse(BaseModel):
    headers: List[str] = Field(default_factory=list)
    records: List[Dict[str, str]] = Field(default_factory=list)
    summary: ParseSummary
    encoding: EncodingReport


class LinesResponse(BaseModel):
    lines: List[str] = Field(default_factory=list)
    summary: ParseSummary
    encoding: EncodingReport


class HealthResponse(BaseModel):
    ok: bool = True
