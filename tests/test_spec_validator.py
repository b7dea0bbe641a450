import pytest

from figspec.services import SpecBuildError, deep_merge, validate_spec


def test_deep_merge_override_wins_and_inputs_untouched():
    base = {"a": {"b": 1, "c": 2}, "d": [1]}
    upd = {"a": {"b": 9}, "d": [2, 3]}
    merged = deep_merge(base, upd)
    assert merged == {"a": {"b": 9, "c": 2}, "d": [2, 3]}
    assert base == {"a": {"b": 1, "c": 2}, "d": [1]}
    merged["a"]["c"] = 0
    assert base["a"]["c"] == 2


def _spec(**extra):
    spec = {
        "title": {},
        "toolbox": {},
        "tooltip": {},
        "legend": {},
        "xAxis": [{"type": "category"}],
        "yAxis": [{"type": "value"}],
        "series": [{"type": "line", "data": [1]}],
    }
    spec.update(extra)
    return spec


def test_validate_accepts_minimal_and_pie():
    assert validate_spec(_spec())
    pie = {"title": {}, "toolbox": {}, "tooltip": {}, "legend": {}, "series": [{"type": "pie", "data": []}]}
    assert validate_spec(pie) is pie


@pytest.mark.parametrize(
    "spec",
    [
        _spec(series=[]),
        _spec(series=[{"type": "line"}]),
        _spec(series=[{"type": "line", "data": [], "xAxisIndex": 1}]),
        {"title": {}, "series": [{"type": "line", "data": []}]},
    ],
)
def test_validate_rejects_broken_specs(spec):
    with pytest.raises(SpecBuildError):
        validate_spec(spec)
