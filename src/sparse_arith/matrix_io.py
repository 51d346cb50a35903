"""
Reading and writing sparse matrices in the line-oriented text format:

    rows=<integer>
    cols=<integer>
    (<row>, <col>, <value>)
    ...

Parsing is strict and all-or-nothing: the first malformed line aborts the load
with a FormatError and no partial matrix is returned.
"""
import os
import re
import logging

from .constants import (ROWS_KEY, COLS_KEY, HEADER_DELIMITER, ENTRY_OPEN, ENTRY_CLOSE,
                        ENTRY_SEPARATOR, ENTRY_FIELD_COUNT)
from .matrix_errors import FormatError, OutOfRangeError
from .sparse_matrix import SparseMatrix

logger = logging.getLogger(__name__)

# optionally signed ascii digits, no underscores
_INTEGER_RE = re.compile(r"^\s*[+-]?[0-9]+\s*$")


def _parse_int(text: str, what: str, source: str, line_number: int) -> int:
    if not _INTEGER_RE.match(text):
        raise FormatError(f"{what} {text.strip()!r} is not an integer", source, line_number)
    try:
        return int(text)
    except ValueError as e:
        # digits beyond the interpreter's int string conversion limit
        raise FormatError(f"{what} has too many digits ({len(text.strip())})", source, line_number) from e


def _parse_header(line: str, key: str, source: str, line_number: int) -> int:
    parts = line.split(HEADER_DELIMITER)
    if len(parts) != 2 or parts[0].strip() != key:
        raise FormatError(f"expected '{key}{HEADER_DELIMITER}<integer>', got {line.strip()!r}", source, line_number)
    count = _parse_int(parts[1], key, source, line_number)
    if count < 0:
        raise FormatError(f"{key} must be non-negative, got {count}", source, line_number)
    return count


def _parse_entry(line: str, source: str, line_number: int) -> tuple[int, int, int]:
    if not (line.startswith(ENTRY_OPEN) and line.endswith(ENTRY_CLOSE)):
        raise FormatError(f"entry {line!r} must be enclosed in parentheses", source, line_number)
    fields = line[1:-1].split(ENTRY_SEPARATOR)
    if len(fields) != ENTRY_FIELD_COUNT:
        raise FormatError(f"entry {line!r} must have exactly {ENTRY_FIELD_COUNT} fields, got {len(fields)}",
                          source, line_number)
    row, col, value = (_parse_int(f, name, source, line_number) for f, name in zip(fields, ('row', 'col', 'value')))
    return row, col, value


def parse_matrix(text: str, source: str = "<string>") -> SparseMatrix:
    """
    Build a SparseMatrix from its text representation.

    Args:
        text: The full contents of a matrix file.
        source: Name used in error messages (usually the file path).

    Returns:
        The parsed matrix. Entries declared with value 0 are not stored.

    Raises:
        FormatError: If the header is missing or malformed, an entry line is not
            '(<row>, <col>, <value>)' with integer fields, or a coordinate lies
            outside the declared shape.
    """
    lines = text.splitlines()
    if len(lines) < 2:
        raise FormatError("missing rows/cols header", source)

    num_rows = _parse_header(lines[0], ROWS_KEY, source, 1)
    num_cols = _parse_header(lines[1], COLS_KEY, source, 2)
    matrix = SparseMatrix(num_rows, num_cols)

    for line_number, line in enumerate(lines[2:], start=3):
        line = line.strip()
        if not line:
            continue
        row, col, value = _parse_entry(line, source, line_number)
        try:
            matrix.set(row, col, value)
        except OutOfRangeError as e:
            raise FormatError(str(e), source, line_number) from e

    return matrix


def serialize_matrix(matrix: SparseMatrix) -> str:
    """
    Render a matrix in the text format.

    Entries are written in row-major (row, col) order so the output does not
    depend on how the matrix was built. No trailing newline is written.
    """
    lines = [f"{ROWS_KEY}{HEADER_DELIMITER}{matrix.num_rows}",
             f"{COLS_KEY}{HEADER_DELIMITER}{matrix.num_cols}"]
    lines.extend(f"({i}, {j}, {v})" for (i, j), v in matrix.sorted_items())
    return "\n".join(lines)


def load_matrix(path) -> SparseMatrix:
    """Read and parse a matrix file. OSError from opening the file is propagated unchanged."""
    path = os.fspath(path)
    with open(path, 'r', encoding='utf-8') as f:
        try:
            text = f.read()
        except UnicodeDecodeError as e:
            raise FormatError("file is not valid UTF-8", path) from e
    matrix = parse_matrix(text, source=path)
    logger.debug(f"Loaded {matrix.num_rows}x{matrix.num_cols} matrix with {matrix.nnz} entries from {path}")
    return matrix


def save_matrix(matrix: SparseMatrix, path) -> None:
    """Write a matrix to path, replacing any existing file."""
    path = os.fspath(path)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(serialize_matrix(matrix))
    logger.debug(f"Saved {matrix.num_rows}x{matrix.num_cols} matrix with {matrix.nnz} entries to {path}")
