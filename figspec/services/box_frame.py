from __future__ import annotations

from copy import deepcopy
from typing import Any, Dict, List, Set

from .errors import SpecBuildError
from .models import ChartSpec
from .spec_validator import deep_merge
from .theme import AXIS_COLOR

PHANTOM_SUFFIX = "__phantom"

_FRAME_LINE: Dict[str, Any] = {"show": True, "lineStyle": {"color": AXIS_COLOR, "width": 1.5}, "onZero": False}

_MIRROR_OVERRIDES: Dict[str, Any] = {
    "axisLabel": {"show": False},
    "splitLine": {"show": False},
    "splitArea": {"show": False},
    "axisLine": _FRAME_LINE,
    "axisTick": {"show": False},
    "minorTick": {"show": False},
}

# Each key replaces the real series' value outright.
_HIDDEN_CHANNELS: Dict[str, Any] = {
    "xAxisIndex": 1,
    "yAxisIndex": 1,
    "showSymbol": False,
    "symbolSize": 0,
    "lineStyle": {"opacity": 0, "width": 0},
    "itemStyle": {"opacity": 0, "borderWidth": 0},
    "areaStyle": {"opacity": 0},
    "label": {"show": False},
    "tooltip": {"show": False},
    "emphasis": {"disabled": True},
    "silent": True,
    "legendHoverLink": False,
}


def _single_axis(spec: ChartSpec, key: str) -> Dict[str, Any]:
    axis = spec.get(key)
    if isinstance(axis, list):
        if len(axis) != 1:
            raise SpecBuildError(f"box frame needs exactly one {key}, found {len(axis)}")
        axis = axis[0]
    if not isinstance(axis, dict):
        raise SpecBuildError(f"box frame needs a {key} descriptor")
    return axis


def mirror_axis(primary: Dict[str, Any], position: str) -> Dict[str, Any]:
    """Copy an axis to the opposite side with everything but its line hidden.

    Category data travels with the copy so both axes map positions identically.
    """

    mirrored = deep_merge(primary, _MIRROR_OVERRIDES)
    mirrored["position"] = position
    mirrored.pop("name", None)
    return mirrored


def phantom_name(name: str, taken: Set[str]) -> str:
    candidate = f"{name}{PHANTOM_SUFFIX}"
    counter = 2
    while candidate in taken:
        candidate = f"{name}{PHANTOM_SUFFIX}{counter}"
        counter += 1
    return candidate


def phantom_series(series: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    taken = {str(s.get("name")) for s in series if s.get("name") is not None}
    phantoms: List[Dict[str, Any]] = []
    for entry in series:
        phantom = deepcopy(entry)
        phantom.update(deepcopy(_HIDDEN_CHANNELS))
        phantom["name"] = phantom_name(str(entry.get("name", entry.get("type", "series"))), taken)
        taken.add(phantom["name"])
        phantoms.append(phantom)
    return phantoms


def add_box_frame(spec: ChartSpec) -> ChartSpec:
    """Close the plot area on all four sides.

    Adds a top X axis and a right Y axis mirroring the primaries, then binds
    an invisible phantom of every real series to the mirrored pair so the
    value axes scale against the same data. The result has exactly twice as
    many series, real ones first in their original order. ``spec`` is left
    untouched.
    """

    primary_x = _single_axis(spec, "xAxis")
    primary_y = _single_axis(spec, "yAxis")
    series = spec.get("series") or []

    framed = deepcopy(spec)
    framed["xAxis"] = [deepcopy(primary_x), mirror_axis(primary_x, "top")]
    framed["yAxis"] = [deepcopy(primary_y), mirror_axis(primary_y, "right")]
    framed["series"] = deepcopy(series) + phantom_series(series)
    return framed
