"""
Default dialect rules.

These are the values a bare ``ParseConfig()`` carries; the parse functions
never read them directly.
"""

DEFAULT_DELIMITER = ","
DEFAULT_COMMENT_CHAR = "#"
DEFAULT_HAS_HEADER = True
DEFAULT_TRIM = True

QUOTE = '"'
NEWLINE = "\n"
NUL = "\0"
BOM = "\ufeff"

# Line endings and the record terminator; a delimiter or comment char
# among them could never match after normalization.
RESERVED_CHARS = frozenset({NEWLINE, "\r", NUL})

SYNTHETIC_HEADER_PREFIX = "field"
