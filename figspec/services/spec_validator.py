from __future__ import annotations

from copy import deepcopy
from typing import Any, Dict, Iterable, List

from .errors import SpecBuildError

_REQUIRED_TOP = ("title", "toolbox", "tooltip", "legend", "series")
_REQUIRED_SERIES = ("type", "data")
_AXIS_FREE_TYPES = {"pie"}


def deep_merge(base: Dict[str, Any], upd: Dict[str, Any]) -> Dict[str, Any]:
    """Merge ``upd`` over ``base`` into a new mapping.

    Nested mappings merge key by key; any other value in ``upd`` replaces the
    base value outright. Neither argument is modified.
    """

    merged = deepcopy(base)
    for key, value in (upd or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = deepcopy(value)
    return merged


def _ensure(condition: bool, message: str) -> None:
    if not condition:
        raise SpecBuildError(message)


def _as_list(axis: Any) -> List[Dict[str, Any]]:
    if isinstance(axis, list):
        return axis
    return [axis]


def _validate_series(series: Iterable[Dict[str, Any]], x_count: int, y_count: int) -> None:
    for idx, entry in enumerate(series):
        _ensure(isinstance(entry, dict), f"series[{idx}] must be object")
        for field in _REQUIRED_SERIES:
            _ensure(field in entry, f"series[{idx}] missing '{field}'")
        if entry["type"] in _AXIS_FREE_TYPES:
            continue
        x_ref = entry.get("xAxisIndex", 0)
        y_ref = entry.get("yAxisIndex", 0)
        _ensure(0 <= x_ref < x_count, f"series[{idx}].xAxisIndex {x_ref} has no axis")
        _ensure(0 <= y_ref < y_count, f"series[{idx}].yAxisIndex {y_ref} has no axis")


def validate_spec(spec: Dict[str, Any]) -> Dict[str, Any]:
    """Check the structure of a finished chart specification and return it."""

    _ensure(isinstance(spec, dict), "spec must be a mapping")
    for field in _REQUIRED_TOP:
        _ensure(field in spec, f"missing top-level field '{field}'")

    series = spec.get("series")
    _ensure(isinstance(series, list) and series, "spec.series must be non-empty list")

    axis_free = all(isinstance(s, dict) and s.get("type") in _AXIS_FREE_TYPES for s in series)
    if axis_free:
        _validate_series(series, 0, 0)
        return spec

    _ensure("xAxis" in spec and "yAxis" in spec, "axis chart needs both xAxis and yAxis")
    x_axes = _as_list(spec["xAxis"])
    y_axes = _as_list(spec["yAxis"])
    _ensure(len(x_axes) == len(y_axes), "xAxis and yAxis must be paired")
    for axis in x_axes + y_axes:
        _ensure(isinstance(axis, dict), "axis entries must be objects")
    _validate_series(series, len(x_axes), len(y_axes))
    return spec
