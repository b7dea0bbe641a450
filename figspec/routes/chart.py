from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from pydantic import ValidationError

from ..core.settings import Settings, get_settings
from ..schemas.chart import (
    BuildSpecRequest,
    ChartSettingsModel,
    ChartSpecResponse,
    DatasetModel,
    ParseResponse,
)
from ..services import DataProfiler, FigspecError, TableLoader, build_chart_spec, json_safe
from ..services.models import ChartSettings, ChartSpec, TabularDataset

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chart", tags=["chart"])

_loader = TableLoader()


def _read_file_bytes(upload: UploadFile, settings: Settings) -> bytes:
    data = upload.file.read(settings.max_upload_bytes + 1)
    if not data:
        raise HTTPException(status_code=400, detail="Uploaded file is empty.")
    if len(data) > settings.max_upload_bytes:
        raise HTTPException(status_code=413, detail=f"Uploaded file exceeds {settings.max_upload_bytes} bytes.")
    return data


def _load(upload: UploadFile, settings: Settings) -> TabularDataset:
    data = _read_file_bytes(upload, settings)
    try:
        return _loader.load(upload.filename or "", data)
    except FigspecError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


def _build(dataset: TabularDataset, chart_settings: ChartSettings) -> ChartSpecResponse:
    try:
        spec: ChartSpec = build_chart_spec(dataset, chart_settings)
    except FigspecError as exc:
        logger.warning("Spec build rejected: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return ChartSpecResponse(
        chart_type=chart_settings.chart_type,
        series_count=len(spec["series"]),
        spec=json_safe(spec),
    )


def _parse_settings_form(raw: str) -> ChartSettingsModel:
    try:
        return ChartSettingsModel.model_validate(json.loads(raw or "{}"))
    except json.JSONDecodeError as exc:
        raise HTTPException(status_code=400, detail=f"settings must be JSON: {exc}") from exc
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=exc.errors()) from exc


@router.post("/parse", response_model=ParseResponse)
def parse_file(file: UploadFile = File(...), settings: Settings = Depends(get_settings)) -> ParseResponse:
    dataset = _load(file, settings)
    profile = DataProfiler(preview_rows=settings.preview_rows).build_profile(dataset)
    return ParseResponse.model_validate(
        {
            "filename": file.filename or "",
            "dataset": DatasetModel.from_dataset(dataset),
            "profile": profile,
        }
    )


@router.post("/spec", response_model=ChartSpecResponse)
def build_spec(request: BuildSpecRequest) -> ChartSpecResponse:
    return _build(request.dataset.to_dataset(), request.settings.to_settings())


@router.post("/spec_from_file", response_model=ChartSpecResponse)
def build_spec_from_file(
    file: UploadFile = File(...),
    chart_settings: str = Form("{}", alias="settings"),
    transpose: bool = Form(False),
    settings: Settings = Depends(get_settings),
) -> ChartSpecResponse:
    model = _parse_settings_form(chart_settings)
    dataset = _load(file, settings)
    if transpose:
        dataset = dataset.transpose()
    return _build(dataset, model.to_settings())


@router.post("/transpose", response_model=DatasetModel)
def transpose_dataset(dataset: DatasetModel) -> DatasetModel:
    return DatasetModel.from_dataset(dataset.to_dataset().transpose())
