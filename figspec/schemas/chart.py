from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr
from pydantic.alias_generators import to_camel

from ..services.data_profile import json_safe
from ..services.models import ChartSettings, TabularDataset, column_ref

ColumnRefModel = Union[StrictInt, StrictStr]


class DatasetModel(BaseModel):
    headers: List[str]
    rows: List[List[Any]]

    @classmethod
    def from_dataset(cls, dataset: TabularDataset) -> "DatasetModel":
        return cls.model_validate(json_safe(dataset.to_lists()))

    def to_dataset(self) -> TabularDataset:
        return TabularDataset.from_lists(self.headers, self.rows)


class ChartSettingsModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    chart_type: Literal["line", "bar", "scatter", "pie", "heatmap", "boxplot"] = "line"
    title: str = ""
    title_font_size: Optional[int] = 14
    font_family: str = "Arial"
    axis_font_size: Optional[int] = 12
    axis_name_font_size: Optional[int] = 14
    x_axis_name: str = ""
    y_axis_name: str = ""
    x_column: ColumnRefModel = 0
    y_columns: List[ColumnRefModel] = Field(default_factory=list)
    label_column: ColumnRefModel = 0
    value_column: ColumnRefModel = 1
    color_scheme: str = "nature"
    show_legend: bool = True
    show_grid: bool = False
    smooth: bool = False
    show_data_label: bool = False

    def to_settings(self) -> ChartSettings:
        return ChartSettings(
            chart_type=self.chart_type,
            title=self.title,
            title_font_size=self.title_font_size,
            font_family=self.font_family,
            axis_font_size=self.axis_font_size,
            axis_name_font_size=self.axis_name_font_size,
            x_axis_name=self.x_axis_name,
            y_axis_name=self.y_axis_name,
            x_column=column_ref(self.x_column),
            y_columns=tuple(column_ref(ref) for ref in self.y_columns),
            label_column=column_ref(self.label_column),
            value_column=column_ref(self.value_column),
            color_scheme=self.color_scheme,
            show_legend=self.show_legend,
            show_grid=self.show_grid,
            smooth=self.smooth,
            show_data_label=self.show_data_label,
        )


class BuildSpecRequest(BaseModel):
    dataset: DatasetModel
    settings: ChartSettingsModel = Field(default_factory=ChartSettingsModel)


class ColumnProfileModel(BaseModel):
    index: int
    name: str
    numeric: bool
    non_empty: int


class DatasetProfileModel(BaseModel):
    row_count: int
    column_count: int
    columns: List[ColumnProfileModel]
    preview_rows: List[List[Any]]
    truncated: bool


class ParseResponse(BaseModel):
    filename: str
    dataset: DatasetModel
    profile: DatasetProfileModel


class ChartSpecResponse(BaseModel):
    chart_type: str
    series_count: int
    spec: Dict[str, Any] = Field(..., description="ECharts-style option, NaN cells emitted as null.")
