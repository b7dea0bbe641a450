from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .errors import ColumnNotFoundError, SpecBuildError
from .models import CHART_TYPES, ByIndex, ByName, ChartSettings, ColumnRef
from .theme import COLOR_SCHEMES, DEFAULT_SCHEME, palette

logger = logging.getLogger(__name__)

_DEFAULT_TITLE_FONT_SIZE = 14
_DEFAULT_AXIS_FONT_SIZE = 12
_DEFAULT_AXIS_NAME_FONT_SIZE = 14
_DEFAULT_FONT_FAMILY = "Arial"

_XY_CHARTS = {"line", "bar", "scatter"}


@dataclass(frozen=True)
class ResolvedSettings:
    """Settings with every column reference the chart kind needs resolved to an index."""

    chart_type: str
    title: str
    title_font_size: int
    font_family: str
    axis_font_size: int
    axis_name_font_size: int
    x_axis_name: str
    y_axis_name: str
    x_index: Optional[int]
    y_indices: Tuple[int, ...]
    label_index: Optional[int]
    value_index: Optional[int]
    color_scheme: str
    colors: Tuple[str, ...]
    show_legend: bool
    show_grid: bool
    smooth: bool
    show_data_label: bool


def resolve_column(ref: ColumnRef, headers: Sequence[str]) -> int:
    if isinstance(ref, ByIndex):
        return ref.index
    if isinstance(ref, ByName):
        try:
            return list(headers).index(ref.name)
        except ValueError:
            raise ColumnNotFoundError(ref.name, headers) from None
    raise TypeError(f"unsupported column reference: {ref!r}")


def default_y_indices(x_index: int, column_count: int) -> List[int]:
    if column_count <= 1:
        return []
    return [0] if x_index == 1 else [1]


def _positive(value: Optional[int], default: int) -> int:
    if value is None or value <= 0:
        return default
    return int(value)


def _color_scheme(key: str) -> str:
    if key in COLOR_SCHEMES:
        return key
    logger.warning("Unknown color scheme %r, falling back to %r", key, DEFAULT_SCHEME)
    return DEFAULT_SCHEME


def resolve_settings(settings: ChartSettings, headers: Sequence[str]) -> ResolvedSettings:
    """Normalize settings against the dataset headers.

    Only the references used by the selected chart kind are resolved, so a
    stale pie column does not break a line chart.

    Raises:
        ColumnNotFoundError: a name-based reference is not among ``headers``.
        SpecBuildError: the chart kind is not one we can build.
    """

    chart_type = settings.chart_type
    if chart_type not in CHART_TYPES:
        raise SpecBuildError(f"Unsupported chart type '{chart_type}'; expected one of {list(CHART_TYPES)}.")

    x_index: Optional[int] = None
    y_indices: List[int] = []
    label_index: Optional[int] = None
    value_index: Optional[int] = None

    if chart_type in _XY_CHARTS or chart_type == "boxplot":
        x_index = resolve_column(settings.x_column, headers)
        y_indices = [resolve_column(ref, headers) for ref in settings.y_columns]
        if not y_indices:
            y_indices = default_y_indices(x_index, len(headers))
    elif chart_type == "heatmap":
        x_index = resolve_column(settings.x_column, headers)
        refs = list(settings.y_columns)
        y_category = resolve_column(refs[0], headers) if refs else 1
        value = resolve_column(refs[1], headers) if len(refs) > 1 else 2
        y_indices = [y_category, value]
    else:
        label_index = resolve_column(settings.label_column, headers)
        value_index = resolve_column(settings.value_column, headers)

    scheme = _color_scheme(settings.color_scheme)
    return ResolvedSettings(
        chart_type=chart_type,
        title=settings.title or "",
        title_font_size=_positive(settings.title_font_size, _DEFAULT_TITLE_FONT_SIZE),
        font_family=settings.font_family or _DEFAULT_FONT_FAMILY,
        axis_font_size=_positive(settings.axis_font_size, _DEFAULT_AXIS_FONT_SIZE),
        axis_name_font_size=_positive(settings.axis_name_font_size, _DEFAULT_AXIS_NAME_FONT_SIZE),
        x_axis_name=settings.x_axis_name or "",
        y_axis_name=settings.y_axis_name or "",
        x_index=x_index,
        y_indices=tuple(y_indices),
        label_index=label_index,
        value_index=value_index,
        color_scheme=scheme,
        colors=tuple(palette(scheme)),
        show_legend=bool(settings.show_legend),
        show_grid=bool(settings.show_grid),
        smooth=bool(settings.smooth),
        show_data_label=bool(settings.show_data_label),
    )
