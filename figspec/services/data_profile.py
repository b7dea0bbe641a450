from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Any, Dict, List

import numpy as np
import pandas as pd

from .models import TabularDataset
from .series import is_numeric_array


def normalize_value(value: Any) -> Any:
    """Make a single value JSON-friendly; NaN and infinities become None."""

    if value is None:
        return None
    if isinstance(value, (np.integer, np.floating)):
        value = value.item()
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def json_safe(payload: Any) -> Any:
    """Recursively apply ``normalize_value`` to a nested spec or dataset."""

    if isinstance(payload, dict):
        return {key: json_safe(value) for key, value in payload.items()}
    if isinstance(payload, (list, tuple)):
        return [json_safe(value) for value in payload]
    return normalize_value(payload)


@dataclass
class ColumnProfile:
    index: int
    name: str
    numeric: bool
    non_empty: int


class DataProfiler:
    """Summarize a dataset for the preview table and column pickers."""

    def __init__(self, preview_rows: int = 20) -> None:
        self.preview_rows = preview_rows

    def build_profile(self, dataset: TabularDataset) -> Dict[str, Any]:
        width = dataset.column_count
        frame = pd.DataFrame(
            [[dataset.cell(row, idx) for idx in range(width)] for row in dataset.rows],
            columns=range(width),
            dtype=object,
        )
        present = frame.notna() & ~frame.isin([""])

        columns: List[ColumnProfile] = []
        for idx, name in enumerate(dataset.headers):
            values = frame[idx][present[idx]].tolist()
            columns.append(
                ColumnProfile(
                    index=idx,
                    name=name,
                    numeric=is_numeric_array(values),
                    non_empty=len(values),
                )
            )

        preview = [json_safe(list(row)) for row in dataset.rows[: self.preview_rows]]
        return {
            "row_count": dataset.row_count,
            "column_count": width,
            "columns": [asdict(col) for col in columns],
            "preview_rows": preview,
            "truncated": dataset.row_count > self.preview_rows,
        }
