from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np

from .models import BoxplotSummary, TabularDataset
from .series import is_missing, to_number

Box = Tuple[float, float, float, float, float]

EMPTY_BOX: Box = (0.0, 0.0, 0.0, 0.0, 0.0)


def percentile(sorted_values: Sequence[float], p: float) -> float:
    """Linear-interpolation percentile at index ``p/100 * (n-1)``."""

    if len(sorted_values) == 0:
        raise ValueError("percentile of an empty sequence")
    return float(np.percentile(np.asarray(sorted_values, dtype=float), p))


def summarize(values: Sequence[float]) -> Tuple[Box, List[float]]:
    """Five-number summary with 1.5 IQR whiskers clamped to the data range.

    Returns the box and the values outside the whiskers, in ascending order.
    """

    clean = sorted(float(v) for v in values if not is_missing(v))
    if not clean:
        return EMPTY_BOX, []

    q1 = percentile(clean, 25)
    q2 = percentile(clean, 50)
    q3 = percentile(clean, 75)
    iqr = q3 - q1
    lower = max(clean[0], q1 - 1.5 * iqr)
    upper = min(clean[-1], q3 + 1.5 * iqr)
    outliers = [v for v in clean if v < lower or v > upper]
    return (lower, q1, q2, q3, upper), outliers


def boxplot_summary(dataset: TabularDataset, indices: Sequence[int]) -> BoxplotSummary:
    categories: List[str] = []
    boxes: List[Box] = []
    outliers: List[Tuple[int, float]] = []

    for position, idx in enumerate(indices):
        categories.append(dataset.header_for(idx))
        values = [to_number(v) for v in dataset.column(idx)]
        box, extremes = summarize(values)
        boxes.append(box)
        outliers.extend((position, value) for value in extremes)

    return BoxplotSummary(
        categories=tuple(categories),
        boxes=tuple(boxes),
        outliers=tuple(outliers),
    )
