from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from .box_frame import add_box_frame
from .categories import heatmap_grid
from .errors import FigspecError, SpecBuildError
from .models import ChartSettings, ChartSpec, HeatmapGrid, TabularDataset, stringify_cell
from .series import XYData, extract_xy, is_missing, is_numeric_array, to_number
from .settings_resolver import ResolvedSettings, resolve_settings
from .spec_validator import deep_merge, validate_spec
from .statistics import boxplot_summary
from .theme import HEATMAP_RAMP, TEXT_COLOR, base_theme, font_stack

logger = logging.getLogger(__name__)

LINE_SYMBOLS = ("circle", "rect", "triangle", "diamond", "pin", "arrow")
SCATTER_SYMBOLS = ("circle", "rect", "triangle", "diamond")

_GRID_TOP_WITH_TITLE = 55
_GRID_TOP = 40
_HEATMAP_LABEL_LIMIT = 100

Builder = Callable[[TabularDataset, ResolvedSettings, Dict[str, Any]], ChartSpec]


def _color(settings: ResolvedSettings, index: int) -> str:
    return settings.colors[index % len(settings.colors)]


def _grid_top(settings: ResolvedSettings) -> int:
    return _GRID_TOP_WITH_TITLE if settings.title else _GRID_TOP


def data_label(settings: ResolvedSettings, color: Optional[str]) -> Dict[str, Any]:
    """Bold value label boxed in the series color, or hidden."""

    if not settings.show_data_label:
        return {"show": False}
    return {
        "show": True,
        "fontFamily": font_stack(settings.font_family),
        "fontSize": settings.axis_font_size,
        "fontWeight": "bold",
        "color": color or "#000",
        "backgroundColor": "rgba(255,255,255,0.85)",
        "borderColor": color or "#999",
        "borderWidth": 1,
        "borderRadius": 3,
        "padding": [3, 6],
        "position": "top",
        "distance": 8,
    }


def _series_legend(
    settings: ResolvedSettings,
    base: Dict[str, Any],
    names: Sequence[str],
    icon: Optional[str] = None,
) -> Dict[str, Any]:
    if not (settings.show_legend and len(names) > 1):
        return {"show": False}
    legend = deep_merge(
        base["legend"],
        {
            "show": True,
            "data": list(names),
            "top": _grid_top(settings) + 8,
            "left": 85,
            "orient": "vertical",
            "backgroundColor": "rgba(255,255,255,0.8)",
            "borderColor": "#ccc",
            "borderWidth": 1,
            "borderRadius": 4,
            "padding": [8, 12],
        },
    )
    if icon:
        legend["icon"] = icon
    return legend


def _common(settings: ResolvedSettings, base: Dict[str, Any]) -> ChartSpec:
    """Sections every chart kind shares: page style, title, palette, toolbox."""

    option = {key: value for key, value in base.items() if key not in ("xAxis", "yAxis", "grid", "legend")}
    option = deep_merge(option, {"color": list(settings.colors), "animationDuration": 500, "animationEasing": "cubicOut"})
    option["title"] = deep_merge(
        base["title"],
        {
            "text": settings.title,
            "textStyle": {"fontSize": settings.title_font_size},
            "left": "center",
            "top": 8,
        },
    )
    option["toolbox"] = deep_merge(
        base["toolbox"],
        {
            "feature": {
                "saveAsImage": {"title": "Save", "pixelRatio": 3},
                "dataZoom": {"title": {"zoom": "Zoom", "back": "Reset zoom"}},
                "restore": {"title": "Restore"},
            },
            "right": 12,
            "top": 4,
            "itemSize": 13,
        },
    )
    return option


def _value_axis(base_axis: Dict[str, Any], name: str, show_grid: bool) -> Dict[str, Any]:
    return deep_merge(base_axis, {"type": "value", "name": name, "splitLine": {"show": show_grid}})


def _xy_data(dataset: TabularDataset, settings: ResolvedSettings) -> XYData:
    if not settings.y_indices:
        raise SpecBuildError(f"A {settings.chart_type} chart needs at least one Y column.")
    return extract_xy(dataset, settings.x_index, settings.y_indices)


def _xy_frame(settings: ResolvedSettings, base: Dict[str, Any], tooltip: Dict[str, Any]) -> ChartSpec:
    option = _common(settings, base)
    option["tooltip"] = deep_merge(base["tooltip"], tooltip)
    option["grid"] = deep_merge(base["grid"], {"top": _grid_top(settings), "bottom": 60})
    return option


def build_line(dataset: TabularDataset, settings: ResolvedSettings, base: Dict[str, Any]) -> ChartSpec:
    xy = _xy_data(dataset, settings)
    names = [s.name for s in xy.series]

    option = _xy_frame(settings, base, {"trigger": "axis"})
    option["legend"] = _series_legend(settings, base, names, icon="roundRect")
    option["xAxis"] = deep_merge(
        base["xAxis"],
        {
            "type": "category",
            "data": list(xy.x_data),
            "name": settings.x_axis_name,
            "boundaryGap": False,
            "splitLine": {"show": settings.show_grid},
        },
    )
    option["yAxis"] = _value_axis(base["yAxis"], settings.y_axis_name, settings.show_grid)
    option["series"] = [
        {
            "name": s.name,
            "type": "line",
            "data": list(s.data),
            "smooth": settings.smooth,
            "symbol": LINE_SYMBOLS[i % len(LINE_SYMBOLS)],
            "symbolSize": 8,
            "lineStyle": {"width": 2.5, "color": _color(settings, i)},
            "itemStyle": {"color": _color(settings, i)},
            "label": data_label(settings, _color(settings, i)),
            "emphasis": {"scale": True, "symbolSize": 12},
        }
        for i, s in enumerate(xy.series)
    ]
    return option


def build_bar(dataset: TabularDataset, settings: ResolvedSettings, base: Dict[str, Any]) -> ChartSpec:
    xy = _xy_data(dataset, settings)
    names = [s.name for s in xy.series]

    option = _xy_frame(settings, base, {"trigger": "axis", "axisPointer": {"type": "shadow"}})
    option["legend"] = _series_legend(settings, base, names)
    option["xAxis"] = deep_merge(
        base["xAxis"],
        {"type": "category", "data": list(xy.x_data), "name": settings.x_axis_name},
    )
    option["yAxis"] = _value_axis(base["yAxis"], settings.y_axis_name, settings.show_grid)
    option["series"] = [
        {
            "name": s.name,
            "type": "bar",
            "data": list(s.data),
            "barMaxWidth": 40,
            "itemStyle": {"color": _color(settings, i), "borderColor": "#000", "borderWidth": 0.5},
            "label": data_label(settings, _color(settings, i)),
            "emphasis": {"itemStyle": {"shadowBlur": 4, "shadowColor": "rgba(0,0,0,0.2)"}},
        }
        for i, s in enumerate(xy.series)
    ]
    return option


def build_scatter(dataset: TabularDataset, settings: ResolvedSettings, base: Dict[str, Any]) -> ChartSpec:
    xy = _xy_data(dataset, settings)
    names = [s.name for s in xy.series]
    numeric_x = is_numeric_array(xy.x_data)

    option = _xy_frame(settings, base, {"trigger": "item"})
    option["legend"] = _series_legend(settings, base, names)
    if numeric_x:
        option["xAxis"] = _value_axis(base["xAxis"], settings.x_axis_name, settings.show_grid)
    else:
        option["xAxis"] = deep_merge(
            base["xAxis"],
            {
                "type": "category",
                "data": list(xy.x_data),
                "name": settings.x_axis_name,
                "splitLine": {"show": settings.show_grid},
            },
        )
    option["yAxis"] = _value_axis(base["yAxis"], settings.y_axis_name, settings.show_grid)

    series: List[Dict[str, Any]] = []
    for i, s in enumerate(xy.series):
        if numeric_x:
            points: List[Any] = [[to_number(x), y] for x, y in zip(xy.x_data, s.data)]
        else:
            points = list(s.data)
        series.append(
            {
                "name": s.name,
                "type": "scatter",
                "data": points,
                "symbol": SCATTER_SYMBOLS[i % len(SCATTER_SYMBOLS)],
                "symbolSize": 9,
                "itemStyle": {"color": _color(settings, i), "borderColor": "#000", "borderWidth": 0.5},
                "label": data_label(settings, _color(settings, i)),
                "emphasis": {"scale": 1.3},
            }
        )
    option["series"] = series
    return option


def build_pie(dataset: TabularDataset, settings: ResolvedSettings, base: Dict[str, Any]) -> ChartSpec:
    slices: List[Dict[str, Any]] = []
    for row in dataset.rows:
        value = to_number(dataset.cell(row, settings.value_index))
        if is_missing(value) or value <= 0:
            continue
        slices.append({"name": stringify_cell(dataset.cell(row, settings.label_index)), "value": value})

    font = font_stack(settings.font_family)
    option = _common(settings, base)
    option["tooltip"] = deep_merge(base["tooltip"], {"trigger": "item", "formatter": "{b}: {c} ({d}%)"})
    if settings.show_legend:
        option["legend"] = deep_merge(
            base["legend"],
            {"show": True, "orient": "vertical", "right": 20, "top": "center", "data": [s["name"] for s in slices]},
        )
    else:
        option["legend"] = {"show": False}
    option["series"] = [
        {
            "name": dataset.header_for(settings.value_index),
            "type": "pie",
            "radius": ["35%", "65%"],
            "center": ["40%", "55%"] if settings.show_legend else ["50%", "55%"],
            "avoidLabelOverlap": True,
            "itemStyle": {"borderColor": "#fff", "borderWidth": 2},
            "label": {
                "show": True,
                "fontSize": settings.axis_font_size,
                "fontFamily": font,
                "color": TEXT_COLOR,
                "formatter": "{b}\n{c} ({d}%)" if settings.show_data_label else "{b}\n{d}%",
            },
            "emphasis": {"label": {"fontSize": settings.axis_font_size + 2, "fontWeight": "bold"}},
            "data": slices,
        }
    ]
    return option


def _heatmap_cell(grid: HeatmapGrid, cell: Tuple[int, int, float]) -> Dict[str, Any]:
    """Data item named "x, y: value" so the tooltip can print it."""

    x_pos, y_pos, value = cell
    shown = "-" if is_missing(value) else stringify_cell(value)
    return {
        "name": f"{grid.x_categories[x_pos]}, {grid.y_categories[y_pos]}: {shown}",
        "value": [x_pos, y_pos, value],
    }


def build_heatmap(dataset: TabularDataset, settings: ResolvedSettings, base: Dict[str, Any]) -> ChartSpec:
    y_index, value_index = settings.y_indices
    indices = (settings.x_index, y_index, value_index)
    if any(idx < 0 or idx >= dataset.column_count for idx in indices):
        raise SpecBuildError(
            "A heatmap needs X category, Y category and value columns; "
            f"columns {list(indices)} do not all exist in a {dataset.column_count}-column dataset."
        )

    grid = heatmap_grid(dataset, settings.x_index, y_index, value_index)
    font = font_stack(settings.font_family)

    option = _common(settings, base)
    option["legend"] = {"show": False}
    option["tooltip"] = deep_merge(base["tooltip"], {"trigger": "item", "position": "top", "formatter": "{b}"})
    option["grid"] = deep_merge(base["grid"], {"top": 50, "bottom": 65})
    option["xAxis"] = deep_merge(
        base["xAxis"],
        {"type": "category", "data": list(grid.x_categories), "name": settings.x_axis_name, "splitArea": {"show": True}},
    )
    option["yAxis"] = deep_merge(
        base["yAxis"],
        {"type": "category", "data": list(grid.y_categories), "name": settings.y_axis_name, "splitArea": {"show": True}},
    )
    option["visualMap"] = {
        "min": grid.min_value,
        "max": grid.max_value,
        "calculable": True,
        "orient": "horizontal",
        "left": "center",
        "bottom": 4,
        "seriesIndex": 0,
        "inRange": {"color": list(HEATMAP_RAMP)},
        "textStyle": {"fontFamily": font, "color": TEXT_COLOR, "fontSize": 11},
    }
    option["series"] = [
        {
            "name": dataset.header_for(value_index),
            "type": "heatmap",
            "data": [_heatmap_cell(grid, cell) for cell in grid.cells],
            "label": {
                "show": len(grid.cells) < _HEATMAP_LABEL_LIMIT,
                "fontSize": 10,
                "fontFamily": font,
                "color": TEXT_COLOR,
            },
            "emphasis": {"itemStyle": {"shadowBlur": 6, "shadowColor": "rgba(0,0,0,0.3)"}},
        }
    ]
    return option


def build_boxplot(dataset: TabularDataset, settings: ResolvedSettings, base: Dict[str, Any]) -> ChartSpec:
    if not settings.y_indices:
        raise SpecBuildError("A boxplot needs at least one value column.")
    summary = boxplot_summary(dataset, settings.y_indices)

    option = _common(settings, base)
    option["legend"] = {"show": False}
    option["tooltip"] = deep_merge(base["tooltip"], {"trigger": "item"})
    option["grid"] = deep_merge(base["grid"], {})
    option["xAxis"] = deep_merge(
        base["xAxis"],
        {"type": "category", "data": list(summary.categories), "name": settings.x_axis_name},
    )
    option["yAxis"] = _value_axis(base["yAxis"], settings.y_axis_name, settings.show_grid)
    option["series"] = [
        {
            "name": "Distribution",
            "type": "boxplot",
            "data": [list(box) for box in summary.boxes],
            "itemStyle": {"color": "#fff", "borderColor": "#000", "borderWidth": 1.5},
            "emphasis": {"itemStyle": {"borderWidth": 2}},
        }
    ]
    if summary.outliers:
        option["series"].append(
            {
                "name": "Outliers",
                "type": "scatter",
                "data": [[position, value] for position, value in summary.outliers],
                "symbolSize": 5,
                "itemStyle": {"color": "#e74c3c", "borderColor": "#000", "borderWidth": 0.5},
            }
        )
    return option


BUILDERS: Dict[str, Builder] = {
    "line": build_line,
    "bar": build_bar,
    "scatter": build_scatter,
    "pie": build_pie,
    "heatmap": build_heatmap,
    "boxplot": build_boxplot,
}

_UNFRAMED = {"pie"}


def build_chart_spec(dataset: TabularDataset, settings: ChartSettings) -> ChartSpec:
    """Build a complete, framed chart specification from scratch.

    Raises:
        ColumnNotFoundError: a name-based column reference is missing.
        SpecBuildError: the chart kind lacks the columns it needs, or
            assembly failed.
    """

    resolved = resolve_settings(settings, dataset.headers)
    base = base_theme(
        resolved.font_family,
        resolved.title_font_size,
        resolved.axis_font_size,
        resolved.axis_name_font_size,
    )
    builder = BUILDERS[resolved.chart_type]
    try:
        spec = builder(dataset, resolved, base)
        if resolved.chart_type not in _UNFRAMED:
            spec = add_box_frame(spec)
    except FigspecError:
        raise
    except (TypeError, ValueError, IndexError, KeyError) as exc:
        raise SpecBuildError(f"Failed to build {resolved.chart_type} chart: {exc}") from exc

    validate_spec(spec)
    logger.debug(
        "Built %s spec: %d rows, %d series",
        resolved.chart_type,
        dataset.row_count,
        len(spec["series"]),
    )
    return spec
