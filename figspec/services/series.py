from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from typing import Any, List, Sequence, Tuple

from .models import Series, TabularDataset

MISSING = float("nan")

_SAMPLE_SIZE = 10


def is_missing(value: float) -> bool:
    return isinstance(value, float) and math.isnan(value)


def to_number(value: Any) -> float:
    """Coerce a raw cell to a number, NaN when it does not parse."""

    if isinstance(value, bool):
        return float(value)
    if isinstance(value, numbers.Real):
        return value
    if value is None:
        return MISSING
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return MISSING
        try:
            return float(text)
        except ValueError:
            return MISSING
    return MISSING


def is_numeric_array(values: Sequence[Any]) -> bool:
    """Decide from the first ten entries whether a sequence is numeric."""

    if not values:
        return False
    sample = list(values[:_SAMPLE_SIZE])
    return all(not is_missing(to_number(v)) for v in sample)


@dataclass(frozen=True)
class XYData:
    x_data: Tuple[Any, ...]
    series: Tuple[Series, ...]


def extract_series(dataset: TabularDataset, index: int) -> Series:
    return Series(
        name=dataset.header_for(index),
        data=tuple(to_number(dataset.cell(row, index)) for row in dataset.rows),
    )


def extract_xy(dataset: TabularDataset, x_index: int, y_indices: Sequence[int]) -> XYData:
    x_data: List[Any] = []
    for row in dataset.rows:
        cell = dataset.cell(row, x_index)
        x_data.append("" if cell is None else cell)
    return XYData(
        x_data=tuple(x_data),
        series=tuple(extract_series(dataset, idx) for idx in y_indices),
    )
