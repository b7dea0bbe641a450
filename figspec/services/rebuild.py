from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Optional

from .errors import FigspecError, SpecBuildError
from .models import ChartSettings, ChartSpec, TabularDataset
from .spec_builder import build_chart_spec

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppState:
    """Everything a rebuild depends on. UI events produce a new state."""

    dataset: Optional[TabularDataset] = None
    settings: ChartSettings = field(default_factory=ChartSettings)

    def with_dataset(self, dataset: Optional[TabularDataset]) -> "AppState":
        return replace(self, dataset=dataset)

    def with_settings(self, **changes: Any) -> "AppState":
        return replace(self, settings=self.settings.update(**changes))

    def transposed(self) -> "AppState":
        if self.dataset is None:
            return self
        return replace(self, dataset=self.dataset.transpose())


@dataclass(frozen=True)
class RenderOutcome:
    spec: Optional[ChartSpec]
    ok: bool
    status: str


def rebuild(state: AppState) -> ChartSpec:
    if state.dataset is None:
        raise SpecBuildError("No dataset loaded.")
    return build_chart_spec(state.dataset, state.settings)


def render(state: AppState, previous: Optional[ChartSpec] = None) -> RenderOutcome:
    """Rebuild for display; on failure keep ``previous`` and report why."""

    try:
        spec = rebuild(state)
    except FigspecError as exc:
        logger.warning("Chart rebuild failed: %s", exc)
        return RenderOutcome(spec=previous, ok=False, status=f"Chart build failed: {exc}")
    return RenderOutcome(spec=spec, ok=True, status=f"Rendered {state.settings.chart_type} chart")
