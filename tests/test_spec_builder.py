import json
import math

import pytest

from figspec.services import (
    ByIndex,
    ByName,
    ChartSettings,
    ColumnNotFoundError,
    SpecBuildError,
    TabularDataset,
    build_chart_spec,
    json_safe,
)

SALES = TabularDataset.from_lists(
    ["Month", "Sales", "Cost"],
    [["Jan", 10, 5], ["Feb", 20, ""], ["Mar", 15, 7]],
)


def _real(spec):
    return [s for s in spec["series"] if not s.get("silent")]


def test_line_defaults_to_second_column():
    spec = build_chart_spec(SALES, ChartSettings())
    real = _real(spec)
    assert [s["name"] for s in real] == ["Sales"]
    assert len(spec["series"]) == 2
    assert spec["xAxis"][0]["data"] == ["Jan", "Feb", "Mar"]
    assert spec["xAxis"][0]["type"] == "category"
    assert spec["legend"] == {"show": False}
    assert real[0]["symbol"] == "circle"


def test_line_multi_series_legend_and_missing_values():
    settings = ChartSettings(y_columns=(ByName("Sales"), ByName("Cost")), title="Q1")
    spec = build_chart_spec(SALES, settings)
    assert spec["legend"]["show"] is True
    assert spec["legend"]["data"] == ["Sales", "Cost"]
    assert spec["title"]["text"] == "Q1"
    cost = _real(spec)[1]
    assert math.isnan(cost["data"][1])
    assert json_safe(cost["data"]) == [5, None, 7]


def test_legend_hidden_when_disabled():
    settings = ChartSettings(y_columns=(ByIndex(1), ByIndex(2)), show_legend=False)
    spec = build_chart_spec(SALES, settings)
    assert spec["legend"] == {"show": False}


def test_bar_series_and_frame():
    settings = ChartSettings(chart_type="bar", y_columns=(ByIndex(1),), show_data_label=True)
    spec = build_chart_spec(SALES, settings)
    bar = _real(spec)[0]
    assert bar["type"] == "bar"
    assert bar["label"]["show"] is True
    assert len(spec["yAxis"]) == 2


def test_scatter_numeric_x_uses_value_axis():
    dataset = TabularDataset.from_lists(["x", "y"], [[1, 2], [2, 4], [3, 6]])
    spec = build_chart_spec(dataset, ChartSettings(chart_type="scatter"))
    assert spec["xAxis"][0]["type"] == "value"
    assert _real(spec)[0]["data"] == [[1, 2], [2, 4], [3, 6]]


def test_scatter_category_x():
    spec = build_chart_spec(SALES, ChartSettings(chart_type="scatter"))
    assert spec["xAxis"][0]["type"] == "category"
    assert _real(spec)[0]["data"] == [10, 20, 15]


def test_pie_keeps_positive_slices_only():
    dataset = TabularDataset.from_lists(
        ["Label", "Value"],
        [["A", 3], ["B", 0], ["C", "-1"], ["D", "x"], ["E", "2.5"]],
    )
    spec = build_chart_spec(dataset, ChartSettings(chart_type="pie"))
    assert "xAxis" not in spec and "grid" not in spec
    assert len(spec["series"]) == 1
    assert spec["series"][0]["data"] == [{"name": "A", "value": 3}, {"name": "E", "value": 2.5}]


def test_heatmap_grid_and_visual_map():
    dataset = TabularDataset.from_lists(
        ["x", "y", "v"],
        [["A", "X", 1], ["B", "X", 2], ["A", "Y", 3]],
    )
    spec = build_chart_spec(dataset, ChartSettings(chart_type="heatmap"))
    heat = _real(spec)[0]
    assert heat["type"] == "heatmap"
    assert [item["value"] for item in heat["data"]] == [[0, 0, 1], [1, 0, 2], [0, 1, 3]]
    assert [item["name"] for item in heat["data"]] == ["A, X: 1", "B, X: 2", "A, Y: 3"]
    assert spec["tooltip"]["formatter"] == "{b}"
    assert (spec["visualMap"]["min"], spec["visualMap"]["max"]) == (1, 3)
    assert spec["xAxis"][0]["data"] == ["A", "B"]
    assert spec["yAxis"][0]["data"] == ["X", "Y"]


def test_heatmap_needs_three_columns():
    dataset = TabularDataset.from_lists(["x", "y"], [["A", "X"]])
    with pytest.raises(SpecBuildError):
        build_chart_spec(dataset, ChartSettings(chart_type="heatmap"))


def test_boxplot_with_outliers():
    dataset = TabularDataset.from_lists(["a"], [[v] for v in (1, 2, 3, 4, 50)])
    settings = ChartSettings(chart_type="boxplot", y_columns=(ByIndex(0),))
    spec = build_chart_spec(dataset, settings)
    assert [s["name"] for s in _real(spec)] == ["Distribution", "Outliers"]
    assert _real(spec)[1]["data"] == [[0, 50.0]]
    assert spec["xAxis"][0]["data"] == ["a"]
    assert len(spec["series"]) == 4


def test_line_without_y_column_fails():
    dataset = TabularDataset.from_lists(["only"], [[1], [2]])
    with pytest.raises(SpecBuildError):
        build_chart_spec(dataset, ChartSettings())


def test_missing_named_column():
    with pytest.raises(ColumnNotFoundError):
        build_chart_spec(SALES, ChartSettings(x_column=ByName("Week")))


def test_build_is_deterministic():
    settings = ChartSettings(chart_type="bar", y_columns=(ByIndex(1), ByIndex(2)), color_scheme="ocean")
    first = json.dumps(json_safe(build_chart_spec(SALES, settings)), sort_keys=True)
    second = json.dumps(json_safe(build_chart_spec(SALES, settings)), sort_keys=True)
    assert first == second


def test_heatmap_tooltip_marks_missing_values():
    dataset = TabularDataset.from_lists(["x", "y", "v"], [["A", "X", 2.5], ["B", "X", ""]])
    spec = build_chart_spec(dataset, ChartSettings(chart_type="heatmap"))
    names = [item["name"] for item in _real(spec)[0]["data"]]
    assert names == ["A, X: 2.5", "B, X: -"]


FRAMED = {
    "line": ChartSettings(y_columns=(ByIndex(1), ByIndex(2))),
    "bar": ChartSettings(chart_type="bar", y_columns=(ByIndex(1), ByIndex(2))),
    "scatter": ChartSettings(chart_type="scatter", y_columns=(ByIndex(1),)),
    "boxplot": ChartSettings(chart_type="boxplot", y_columns=(ByIndex(1), ByIndex(2))),
    "heatmap": ChartSettings(chart_type="heatmap"),
}


@pytest.mark.parametrize("kind", sorted(FRAMED))
def test_framed_kinds_have_invisible_phantoms(kind):
    spec = build_chart_spec(SALES, FRAMED[kind])
    series = spec["series"]
    half = len(series) // 2
    assert len(series) == 2 * half and half >= 1

    names = [s["name"] for s in series]
    assert len(names) == len(set(names))

    for real, phantom in zip(series[:half], series[half:]):
        assert phantom["name"].startswith(real["name"])
        assert phantom["type"] == real["type"]
        assert json_safe(phantom["data"]) == json_safe(real["data"])
        assert (phantom["xAxisIndex"], phantom["yAxisIndex"]) == (1, 1)
        assert phantom["itemStyle"]["opacity"] == 0
        assert phantom["lineStyle"]["opacity"] == 0
        assert phantom["areaStyle"]["opacity"] == 0
        assert phantom["label"]["show"] is False
        assert phantom["tooltip"]["show"] is False
        assert phantom["silent"] is True
