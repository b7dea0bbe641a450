from .box_frame import add_box_frame
from .categories import CategoryIndex, heatmap_grid
from .data_profile import DataProfiler, json_safe
from .errors import ColumnNotFoundError, FigspecError, ParseError, SpecBuildError, UnsupportedFormatError
from .models import ByIndex, ByName, ChartSettings, Series, TabularDataset, column_ref
from .rebuild import AppState, RenderOutcome, rebuild, render
from .series import is_numeric_array, to_number
from .settings_resolver import resolve_settings
from .spec_builder import build_chart_spec
from .spec_validator import deep_merge, validate_spec
from .statistics import percentile
from .table_loader import TableLoader

__all__ = [
    "add_box_frame",
    "CategoryIndex",
    "heatmap_grid",
    "DataProfiler",
    "json_safe",
    "ColumnNotFoundError",
    "FigspecError",
    "ParseError",
    "SpecBuildError",
    "UnsupportedFormatError",
    "ByIndex",
    "ByName",
    "ChartSettings",
    "Series",
    "TabularDataset",
    "column_ref",
    "AppState",
    "RenderOutcome",
    "rebuild",
    "render",
    "is_numeric_array",
    "to_number",
    "resolve_settings",
    "build_chart_spec",
    "deep_merge",
    "validate_spec",
    "percentile",
    "TableLoader",
]
