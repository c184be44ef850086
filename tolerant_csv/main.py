import logging
from typing import Any, Dict, List

from fastapi import FastAPI, UploadFile, File, HTTPException
from pydantic import ValidationError

from .decode import decode_bytes
from .lines import split_lines
from .models import (
    HealthResponse,
    LinesResponse,
    ParseConfig,
    ParseResponse,
    RowsResponse,
)
from .records import build_records, synthesize_headers
from .rules import DEFAULT_COMMENT_CHAR, DEFAULT_DELIMITER, DEFAULT_HAS_HEADER, DEFAULT_TRIM
from .settings import Settings, configure_logging
from .tokenizer import Row, tokenize

settings = Settings.load()
configure_logging(settings)

logger = logging.getLogger(__name__)

ACCEPTED_SUFFIXES = (".csv", ".tsv", ".txt")

app = FastAPI(
    title="tolerant-csv",
    description="Best-effort parsing of messy delimited text",
    version="0.1.0",
)


async def _read_upload(file: UploadFile) -> tuple[str, Dict[str, Any]]:
    filename = file.filename or ""
    if not filename.lower().endswith(ACCEPTED_SUFFIXES):
        logger.warning("rejected upload %r: unsupported file type", filename)
        raise HTTPException(status_code=422, detail="Only CSV, TSV or TXT files are supported")

    raw = await file.read()
    if len(raw) > settings.max_upload_bytes:
        logger.warning("rejected upload %r: %d bytes over limit", filename, len(raw))
        raise HTTPException(
            status_code=413,
            detail=f"File exceeds {settings.max_upload_bytes} bytes",
        )
    return decode_bytes(raw)


def _config(**options: Any) -> ParseConfig:
    try:
        return ParseConfig(**options)
    except ValidationError as exc:
        raise HTTPException(
            status_code=422,
            detail=exc.errors(include_url=False, include_context=False),
        ) from exc


def _summary(rows: List[Row]) -> Dict[str, Any]:
    if not rows:
        return {"rows": 0, "columns": None, "ragged_rows": 0}
    width = len(rows[0])
    return {
        "rows": len(rows),
        "columns": max(len(row) for row in rows),
        "ragged_rows": sum(1 for row in rows if len(row) != width),
    }


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.post("/rows", response_model=RowsResponse)
async def tokenize_csv(
    file: UploadFile = File(...),
    delimiter: str = DEFAULT_DELIMITER,
    comment_char: str = DEFAULT_COMMENT_CHAR,
    trim: bool = DEFAULT_TRIM,
):
    config = _config(delimiter=delimiter, comment_char=comment_char, trim=trim)
    text, encoding = await _read_upload(file)
    rows = tokenize(text, config)
    logger.info("tokenized %s: %d rows", file.filename, len(rows))
    return {"rows": rows, "summary": _summary(rows), "encoding": encoding}


@app.post("/parse", response_model=ParseResponse)
async def parse_csv(
    file: UploadFile = File(...),
    delimiter: str = DEFAULT_DELIMITER,
    comment_char: str = DEFAULT_COMMENT_CHAR,
    has_header: bool = DEFAULT_HAS_HEADER,
    trim: bool = DEFAULT_TRIM,
):
    config = _config(
        delimiter=delimiter,
        comment_char=comment_char,
        has_header=has_header,
        trim=trim,
    )
    text, encoding = await _read_upload(file)
    rows = tokenize(text, config)
    records = build_records(rows, has_header=config.has_header)

    if not rows:
        headers = []
    elif config.has_header:
        headers = rows[0]
    else:
        headers = synthesize_headers(rows)

    summary = _summary(rows)
    summary["records"] = len(records)
    logger.info("parsed %s: %d records", file.filename, len(records))
    return {"headers": headers, "records": records, "summary": summary, "encoding": encoding}


@app.post("/lines", response_model=LinesResponse)
async def split_csv_lines(file: UploadFile = File(...)):
    text, encoding = await _read_upload(file)
    lines = list(split_lines(text))
    logger.info("split %s: %d lines", file.filename, len(lines))
    return {"lines": lines, "summary": {"rows": len(lines)}, "encoding": encoding}
