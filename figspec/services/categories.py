from __future__ import annotations

from typing import Any, Dict, Iterable, List, Tuple

from .models import HeatmapGrid, TabularDataset, stringify_cell
from .series import is_missing, to_number


class CategoryIndex:
    """Unique stringified values in first-seen order with O(1) position lookup."""

    def __init__(self, values: Iterable[Any] = ()) -> None:
        self._labels: List[str] = []
        self._positions: Dict[str, int] = {}
        for value in values:
            self.add(value)

    def add(self, value: Any) -> int:
        label = stringify_cell(value)
        position = self._positions.get(label)
        if position is None:
            position = len(self._labels)
            self._positions[label] = position
            self._labels.append(label)
        return position

    def position(self, value: Any) -> int:
        return self._positions[stringify_cell(value)]

    def __contains__(self, value: Any) -> bool:
        return stringify_cell(value) in self._positions

    def __len__(self) -> int:
        return len(self._labels)

    @property
    def labels(self) -> Tuple[str, ...]:
        return tuple(self._labels)


def heatmap_grid(dataset: TabularDataset, x_index: int, y_index: int, value_index: int) -> HeatmapGrid:
    x_axis = CategoryIndex(dataset.column(x_index))
    y_axis = CategoryIndex(dataset.column(y_index))

    cells: List[Tuple[int, int, float]] = []
    for row in dataset.rows:
        cells.append(
            (
                x_axis.position(dataset.cell(row, x_index)),
                y_axis.position(dataset.cell(row, y_index)),
                to_number(dataset.cell(row, value_index)),
            )
        )

    valid = [value for _, _, value in cells if not is_missing(value)]
    return HeatmapGrid(
        x_categories=x_axis.labels,
        y_categories=y_axis.labels,
        cells=tuple(cells),
        min_value=min(valid) if valid else 0,
        max_value=max(valid) if valid else 0,
    )
