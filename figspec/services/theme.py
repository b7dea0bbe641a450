from __future__ import annotations

from typing import Any, Dict, List

DEFAULT_SCHEME = "nature"

AXIS_COLOR = "#000000"
TEXT_COLOR = "#000000"
SUBTEXT_COLOR = "#333333"
SPLIT_LINE_STYLE: Dict[str, Any] = {"color": "rgba(0,0,0,0.1)", "type": "dashed", "width": 0.8}

COLOR_SCHEMES: Dict[str, Dict[str, Any]] = {
    "default": {
        "name": "Classic",
        "colors": ["#5470c6", "#91cc75", "#fac858", "#ee6666", "#73c0de", "#3ba272", "#fc8452", "#9a60b4", "#ea7ccc"],
    },
    "academic": {
        "name": "Academic",
        "colors": ["#2c3e50", "#3498db", "#e74c3c", "#27ae60", "#f39c12", "#8e44ad", "#1abc9c", "#d35400", "#7f8c8d"],
    },
    "vibrant": {
        "name": "Vibrant",
        "colors": ["#ff6b6b", "#4ecdc4", "#ffe66d", "#a855f7", "#06d6a0", "#118ab2", "#ef476f", "#ffd166", "#073b4c"],
    },
    "pastel": {
        "name": "Pastel",
        "colors": ["#a8d8ea", "#aa96da", "#fcbad3", "#ffffd2", "#b5ead7", "#c7ceea", "#ffdac1", "#e2f0cb", "#ff9aa2"],
    },
    "earth": {
        "name": "Earth",
        "colors": ["#8B4513", "#D2691E", "#DAA520", "#556B2F", "#BC8F8F", "#A0522D", "#6B8E23", "#CD853F", "#8FBC8F"],
    },
    "ocean": {
        "name": "Ocean",
        "colors": ["#006994", "#0099cc", "#40bfb0", "#87ceeb", "#005f73", "#0a9396", "#94d2bd", "#e9d8a6", "#ee9b00"],
    },
    "nature": {
        "name": "Nature",
        "colors": ["#E64B35", "#4DBBD5", "#00A087", "#3C5488", "#F39B7F", "#8491B4", "#91D1C2", "#DC0000", "#7E6148"],
    },
    "science": {
        "name": "Science",
        "colors": ["#3B4992", "#EE0000", "#008B45", "#631879", "#008280", "#BB0021", "#5F559B", "#A20056", "#808180"],
    },
    "lancet": {
        "name": "Lancet",
        "colors": ["#00468B", "#ED0000", "#42B540", "#0099B4", "#925E9F", "#FDAF91", "#AD002A", "#ADB6B6", "#1B1919"],
    },
    "jama": {
        "name": "JAMA",
        "colors": ["#374E55", "#DF8F44", "#00A1D5", "#B24745", "#79AF97", "#6A6599", "#80796B"],
    },
}

HEATMAP_RAMP: List[str] = [
    "#f7fbff", "#deebf7", "#c6dbef", "#9ecae1", "#6baed6", "#4292c6", "#2171b5", "#08519c", "#08306b",
]


def palette(key: str) -> List[str]:
    return list(COLOR_SCHEMES[key]["colors"])


def font_stack(family: str) -> str:
    return f"'{family}', 'Noto Sans SC', Helvetica, sans-serif"


def _axis_style(font: str, axis_font_size: int, axis_name_font_size: int) -> Dict[str, Any]:
    return {
        "axisLine": {"show": True, "lineStyle": {"color": AXIS_COLOR, "width": 1.5}},
        "axisTick": {"show": True, "inside": True, "length": 5, "lineStyle": {"color": AXIS_COLOR, "width": 1}},
        "minorTick": {
            "show": True,
            "splitNumber": 2,
            "length": 3,
            "lineStyle": {"color": AXIS_COLOR, "width": 0.8},
        },
        "axisLabel": {"fontFamily": font, "color": TEXT_COLOR, "fontSize": axis_font_size, "margin": 10},
        "nameTextStyle": {
            "fontFamily": font,
            "color": TEXT_COLOR,
            "fontSize": axis_name_font_size,
            "fontWeight": "bold",
        },
        "nameLocation": "center",
        "splitLine": {"show": False, "lineStyle": dict(SPLIT_LINE_STYLE)},
    }


def base_theme(
    font_family: str,
    title_font_size: int,
    axis_font_size: int,
    axis_name_font_size: int,
) -> Dict[str, Any]:
    """Return a fresh publication-style base option.

    Black axes with inward ticks, bold axis names and a white tooltip box.
    Every call allocates new nested mappings, so callers may merge into the
    result freely.
    """

    font = font_stack(font_family)
    x_axis = _axis_style(font, axis_font_size, axis_name_font_size)
    x_axis["nameGap"] = 32
    y_axis = _axis_style(font, axis_font_size, axis_name_font_size)
    y_axis["nameGap"] = 50
    y_axis["nameRotate"] = 90

    return {
        "backgroundColor": "#ffffff",
        "textStyle": {"fontFamily": font, "color": TEXT_COLOR},
        "title": {
            "textStyle": {
                "fontFamily": font,
                "fontWeight": "bold",
                "color": TEXT_COLOR,
                "fontSize": title_font_size,
            },
            "subtextStyle": {"fontFamily": font, "color": SUBTEXT_COLOR, "fontSize": 12},
        },
        "legend": {
            "textStyle": {"fontFamily": font, "color": TEXT_COLOR, "fontSize": axis_font_size},
            "itemWidth": 25,
            "itemHeight": 10,
            "itemGap": 16,
        },
        "tooltip": {
            "backgroundColor": "rgba(255, 255, 255, 0.96)",
            "borderColor": "#ccc",
            "borderWidth": 1,
            "textStyle": {"fontFamily": font, "color": TEXT_COLOR, "fontSize": 12},
            "borderRadius": 2,
            "padding": [6, 10],
            "extraCssText": "box-shadow: 0 2px 8px rgba(0,0,0,0.15);",
        },
        "xAxis": x_axis,
        "yAxis": y_axis,
        "grid": {"left": 75, "right": 40, "top": 50, "bottom": 60, "containLabel": False},
        "toolbox": {"iconStyle": {"borderColor": "#666"}},
    }
