"""Reading uploaded contact lists (CSV or Excel) into ordered rows."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, List, Tuple, Union

import pandas as pd

from app.services.errors import EmptyFileError, ParseError, UnsupportedFileTypeError

log = logging.getLogger(__name__)

PathLike = Union[str, Path]

SUPPORTED_FORMATS: Tuple[str, ...] = ("csv", "xlsx", "xls")

_EXCEL_ENGINES = {
    "xlsx": "openpyxl",
    "xls": "xlrd",
}

CSV_CHUNK_ROWS = 1000


@dataclass(slots=True)
class RawRow:
    """One data row as extracted from the file, before validation."""

    row_number: int  # 1-based, header excluded
    values: dict[str, str] = field(default_factory=dict)

    def get(self, column: str, default: str = "") -> str:
        return self.values.get(column, default)


@dataclass(slots=True)
class ParsedTable:
    columns: Tuple[str, ...]
    rows: List[RawRow]


def format_for_filename(filename: str | None) -> str:
    """Map an upload file name to a format tag, or reject it."""

    suffix = Path(filename or "").suffix.lower().lstrip(".")
    if suffix not in SUPPORTED_FORMATS:
        raise UnsupportedFileTypeError()
    return suffix


def parse_table(path: PathLike, fmt: str) -> ParsedTable:
    """Parse ``path`` as ``fmt`` and return every non-blank data row in file order.

    The first row is the header. Nothing is returned unless the whole file
    was read: library failures surface as :class:`ParseError`, and a file
    with no data rows as :class:`EmptyFileError`.
    """

    path_obj = Path(path)
    fmt = (fmt or "").lower()
    if fmt not in SUPPORTED_FORMATS:
        raise ParseError(f"Unsupported file format: {fmt or '<none>'}")

    try:
        if path_obj.stat().st_size == 0:
            raise EmptyFileError()
    except OSError as exc:
        log.warning("Uploaded file %s is not readable: %s", path_obj, exc)
        raise ParseError() from exc

    try:
        if fmt == "csv":
            columns, frames = _read_csv(path_obj)
        else:
            columns, frames = _read_excel(path_obj, fmt)
    except pd.errors.EmptyDataError as exc:
        raise EmptyFileError() from exc
    except Exception as exc:
        log.warning("Failed to parse %s as %s: %s", path_obj.name, fmt, exc)
        raise ParseError() from exc

    rows = list(_iter_rows(columns, frames))
    if not rows:
        raise EmptyFileError()

    log.info("Parsed %d rows from %s (%s)", len(rows), path_obj.name, fmt)
    return ParsedTable(columns=columns, rows=rows)


def _read_csv(path: Path) -> tuple[Tuple[str, ...], List[pd.DataFrame]]:
    frames: List[pd.DataFrame] = []
    columns: Tuple[str, ...] = ()
    with pd.read_csv(
        path,
        sep=",",
        # rows with a trailing delimiter must not shift into the index
        index_col=False,
        dtype=str,
        keep_default_na=False,
        encoding="utf-8-sig",
        chunksize=CSV_CHUNK_ROWS,
    ) as reader:
        for chunk in reader:
            if not columns:
                columns = tuple(str(column) for column in chunk.columns)
            frames.append(chunk)
    return columns, frames


def _read_excel(path: Path, fmt: str) -> tuple[Tuple[str, ...], List[pd.DataFrame]]:
    frame = pd.read_excel(
        path,
        sheet_name=0,
        engine=_EXCEL_ENGINES[fmt],
        dtype=str,
        na_filter=False,
    )
    return tuple(str(column) for column in frame.columns), [frame]


def _iter_rows(columns: Tuple[str, ...], frames: Iterable[pd.DataFrame]) -> Iterable[RawRow]:
    row_number = 0
    for frame in frames:
        for record in frame.itertuples(index=False, name=None):
            values = {column: _cell_text(value) for column, value in zip(columns, record)}
            if _row_is_empty(values):
                continue
            row_number += 1
            yield RawRow(row_number=row_number, values=values)


def _row_is_empty(values: dict[str, str]) -> bool:
    return all(not value.strip() for value in values.values())


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, str) and pd.isna(value):
        return ""
    return str(value)


__all__ = [
    "SUPPORTED_FORMATS",
    "ParsedTable",
    "RawRow",
    "format_for_filename",
    "parse_table",
]
