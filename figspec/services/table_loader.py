from __future__ import annotations

import json
import logging
import math
import warnings
from datetime import date, datetime
from io import BytesIO, StringIO
from pathlib import PurePath
from typing import Any, List, Sequence

import pandas as pd

from .errors import ParseError, UnsupportedFormatError
from .models import TabularDataset, stringify_cell

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".csv", ".tsv", ".txt", ".xlsx", ".xls", ".json")

_TXT_DELIMITERS = ("\t", ";", "|")
_EXCEL_ENGINES = {".xlsx": "openpyxl", ".xls": "xlrd"}
_TOO_SHORT = "The file needs a header row and at least one data row."


def detect_delimiter(text: str) -> str:
    """Pick the delimiter of unlabeled text from its first line."""

    first_line = text.split("\n", 1)[0]
    for delimiter in _TXT_DELIMITERS:
        if delimiter in first_line:
            return delimiter
    return ","


def coerce_cell(value: Any) -> Any:
    """Type a decoded cell: empty to None, numeric text to int/float."""

    if value is None:
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if not isinstance(value, str):
        return value
    text = value.strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return text
    return number if math.isfinite(number) else text


def _header(value: Any) -> str:
    return stringify_cell(value).strip()


def _keep_ragged(fields: List[str]) -> List[str]:
    logger.debug("Row has %d fields, extra cells dropped", len(fields))
    return fields


def _is_blank(cell: Any) -> bool:
    return cell is None or cell == ""


class TableLoader:
    """Decode uploaded files into a TabularDataset.

    The first row is always the header. Decoding either returns a complete
    dataset or raises; nothing partial escapes.
    """

    def load(self, filename: str, data: bytes) -> TabularDataset:
        suffix = PurePath(filename or "").suffix.lower()
        if suffix == ".csv":
            dataset = self.load_delimited(self._decode(data), ",")
        elif suffix == ".tsv":
            dataset = self.load_delimited(self._decode(data), "\t")
        elif suffix == ".txt":
            text = self._decode(data)
            dataset = self.load_delimited(text, detect_delimiter(text))
        elif suffix in _EXCEL_ENGINES:
            dataset = self.load_workbook(data, engine=_EXCEL_ENGINES[suffix])
        elif suffix == ".json":
            dataset = self.load_json(self._decode(data))
        else:
            raise UnsupportedFormatError(f"Unsupported file format: '{suffix or filename}'.")
        logger.info(
            "Loaded %s: %d columns x %d rows",
            filename,
            dataset.column_count,
            dataset.row_count,
        )
        return dataset

    def load_delimited(self, text: str, delimiter: str) -> TabularDataset:
        try:
            # Rows wider than the header keep their leading cells.
            with warnings.catch_warnings():
                warnings.simplefilter("ignore", pd.errors.ParserWarning)
                frame = pd.read_csv(
                    StringIO(text),
                    sep=delimiter,
                    header=None,
                    dtype=str,
                    keep_default_na=False,
                    skip_blank_lines=True,
                    engine="python",
                    on_bad_lines=_keep_ragged,
                )
        except pd.errors.EmptyDataError:
            raise ParseError(_TOO_SHORT) from None
        except (pd.errors.ParserError, ValueError) as exc:
            raise ParseError(f"Could not parse delimited text: {exc}") from exc
        return self._from_matrix(frame.values.tolist())

    def load_workbook(self, data: bytes, engine: str = "openpyxl") -> TabularDataset:
        try:
            frame = pd.read_excel(BytesIO(data), sheet_name=0, header=None, dtype=object, engine=engine)
        except ImportError:
            raise
        except Exception as exc:  # noqa: BLE001
            raise ParseError(f"Could not read workbook: {exc}") from exc
        matrix = frame.values.tolist()
        if len(matrix) < 2:
            raise ParseError(_TOO_SHORT)
        header, *rows = matrix
        rows = [row for row in rows if not all(_is_blank(coerce_cell(cell)) for cell in row)]
        return self._from_matrix([header] + rows, check_length=False)

    def load_json(self, text: str) -> TabularDataset:
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ParseError(f"Could not parse JSON: {exc}") from exc

        if isinstance(payload, dict) and isinstance(payload.get("data"), list):
            payload = payload["data"]
        if not isinstance(payload, list) or not payload:
            raise ParseError("JSON input must be a non-empty array of objects.")
        if not all(isinstance(item, dict) for item in payload):
            raise ParseError("JSON input must be a non-empty array of objects.")

        headers = list(payload[0].keys())
        rows = [[item.get(h) for h in headers] for item in payload]
        return TabularDataset.from_lists(headers, rows)

    def _from_matrix(self, matrix: Sequence[Sequence[Any]], check_length: bool = True) -> TabularDataset:
        if check_length and len(matrix) < 2:
            raise ParseError(_TOO_SHORT)
        header, *rows = matrix
        typed: List[List[Any]] = [[coerce_cell(cell) for cell in row] for row in rows]
        return TabularDataset.from_lists([_header(h) for h in header], typed)

    def _decode(self, data: bytes) -> str:
        try:
            return data.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise ParseError(f"File is not valid UTF-8 text: {exc}") from exc
