from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Literal, Sequence, Tuple, Union

ChartType = Literal["line", "bar", "scatter", "pie", "heatmap", "boxplot"]

CHART_TYPES: Tuple[str, ...] = ("line", "bar", "scatter", "pie", "heatmap", "boxplot")

ChartSpec = Dict[str, Any]


@dataclass(frozen=True)
class ByIndex:
    index: int


@dataclass(frozen=True)
class ByName:
    name: str


ColumnRef = Union[ByIndex, ByName]


def column_ref(value: Union[int, str, ByIndex, ByName]) -> ColumnRef:
    """Wrap a raw selector: integers select by position, strings by header name."""

    if isinstance(value, (ByIndex, ByName)):
        return value
    if isinstance(value, bool):
        raise TypeError("column reference must be an int or a str, not bool")
    if isinstance(value, int):
        return ByIndex(value)
    if isinstance(value, str):
        return ByName(value)
    raise TypeError(f"column reference must be an int or a str, got {type(value).__name__}")


def stringify_cell(value: Any) -> str:
    """Render a raw cell as a category label."""

    if value is None:
        return ""
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            return str(int(value))
    return str(value)


@dataclass(frozen=True)
class TabularDataset:
    """Decoded table: display headers plus rows of raw cells.

    Rows may be shorter than the header; missing cells read as ``None``.
    """

    headers: Tuple[str, ...]
    rows: Tuple[Tuple[Any, ...], ...]

    @classmethod
    def from_lists(cls, headers: Sequence[Any], rows: Sequence[Sequence[Any]]) -> "TabularDataset":
        return cls(
            headers=tuple(str(h) if h is not None else "" for h in headers),
            rows=tuple(tuple(row) for row in rows),
        )

    @property
    def column_count(self) -> int:
        return len(self.headers)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def cell(self, row: Sequence[Any], index: int) -> Any:
        if index < 0 or index >= len(row):
            return None
        return row[index]

    def column(self, index: int) -> List[Any]:
        return [self.cell(row, index) for row in self.rows]

    def header_for(self, index: int) -> str:
        if 0 <= index < len(self.headers) and self.headers[index]:
            return self.headers[index]
        return f"Column {index}"

    def transpose(self) -> "TabularDataset":
        """Swap rows and columns; the old header becomes the first column."""

        if not self.rows:
            return self
        matrix = [list(self.headers)] + [list(row) for row in self.rows]
        flipped = [[self.cell(row, col) for row in matrix] for col in range(len(self.headers))]
        return TabularDataset.from_lists(
            [stringify_cell(value) for value in flipped[0]],
            flipped[1:],
        )

    def to_lists(self) -> Dict[str, Any]:
        return {"headers": list(self.headers), "rows": [list(row) for row in self.rows]}


@dataclass(frozen=True)
class ChartSettings:
    """User-editable chart configuration; edits produce a new value."""

    chart_type: str = "line"
    title: str = ""
    title_font_size: int = 14
    font_family: str = "Arial"
    axis_font_size: int = 12
    axis_name_font_size: int = 14
    x_axis_name: str = ""
    y_axis_name: str = ""
    x_column: ColumnRef = ByIndex(0)
    y_columns: Tuple[ColumnRef, ...] = ()
    label_column: ColumnRef = ByIndex(0)
    value_column: ColumnRef = ByIndex(1)
    color_scheme: str = "nature"
    show_legend: bool = True
    show_grid: bool = False
    smooth: bool = False
    show_data_label: bool = False

    def update(self, **changes: Any) -> "ChartSettings":
        return replace(self, **changes)


@dataclass(frozen=True)
class Series:
    name: str
    data: Tuple[float, ...]


@dataclass(frozen=True)
class BoxplotSummary:
    """Per-column five-number summaries plus ``(category, value)`` outliers."""

    categories: Tuple[str, ...]
    boxes: Tuple[Tuple[float, float, float, float, float], ...]
    outliers: Tuple[Tuple[int, float], ...] = field(default=())


@dataclass(frozen=True)
class HeatmapGrid:
    x_categories: Tuple[str, ...]
    y_categories: Tuple[str, ...]
    cells: Tuple[Tuple[int, int, float], ...]
    min_value: float
    max_value: float
