import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from .services import AppState, FigspecError, TableLoader, json_safe, rebuild
from .services.models import CHART_TYPES, ChartSettings, ChartSpec, ColumnRef, column_ref
from .services.theme import COLOR_SCHEMES

console = Console(stderr=True, soft_wrap=False)

logger = logging.getLogger(__name__)


def _column_arg(text: str) -> ColumnRef:
    """Digit-only arguments select by position, anything else by header name."""

    return column_ref(int(text)) if text.isdigit() else column_ref(text)


def _trim(text: str, limit: int = 60) -> str:
    text = text.strip()
    return text if len(text) <= limit else f"{text[: limit - 1]}..."


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="figspec",
        description="Build a publication-style chart specification from a data file.",
    )
    parser.add_argument("data_path", help="CSV, TSV, TXT, XLSX/XLS or JSON file")
    parser.add_argument("--type", dest="chart_type", choices=CHART_TYPES, default="line")
    parser.add_argument("--x", dest="x_column", default="0", help="X column (index or header name)")
    parser.add_argument("--y", dest="y_columns", action="append", default=[], help="Y column, repeatable")
    parser.add_argument("--label", dest="label_column", default="0", help="pie label column")
    parser.add_argument("--value", dest="value_column", default="1", help="pie value column")
    parser.add_argument("--title", default="")
    parser.add_argument("--x-name", dest="x_axis_name", default="")
    parser.add_argument("--y-name", dest="y_axis_name", default="")
    parser.add_argument("--font", dest="font_family", default="Arial")
    parser.add_argument("--title-size", dest="title_font_size", type=int, default=14)
    parser.add_argument("--axis-size", dest="axis_font_size", type=int, default=12)
    parser.add_argument("--axis-name-size", dest="axis_name_font_size", type=int, default=14)
    parser.add_argument("--palette", dest="color_scheme", choices=sorted(COLOR_SCHEMES), default="nature")
    parser.add_argument("--legend", dest="show_legend", action=argparse.BooleanOptionalAction, default=True)
    parser.add_argument("--grid", dest="show_grid", action="store_true")
    parser.add_argument("--smooth", action="store_true")
    parser.add_argument("--data-labels", dest="show_data_label", action="store_true")
    parser.add_argument("--transpose", action="store_true", help="swap rows and columns before building")
    parser.add_argument("--output", "-o", default=None, help="write JSON here instead of stdout")
    parser.add_argument("--verbose", "-v", action="store_true")
    return parser


def settings_from_args(args: argparse.Namespace) -> ChartSettings:
    return ChartSettings(
        chart_type=args.chart_type,
        title=args.title,
        title_font_size=args.title_font_size,
        font_family=args.font_family,
        axis_font_size=args.axis_font_size,
        axis_name_font_size=args.axis_name_font_size,
        x_axis_name=args.x_axis_name,
        y_axis_name=args.y_axis_name,
        x_column=_column_arg(args.x_column),
        y_columns=tuple(_column_arg(col) for col in args.y_columns),
        label_column=_column_arg(args.label_column),
        value_column=_column_arg(args.value_column),
        color_scheme=args.color_scheme,
        show_legend=args.show_legend,
        show_grid=args.show_grid,
        smooth=args.smooth,
        show_data_label=args.show_data_label,
    )


def _summary(state: AppState, spec: ChartSpec, output: Optional[str]) -> Table:
    dataset = state.dataset
    summary = Table.grid(padding=(0, 2))
    summary.add_column(style="cyan", justify="right", no_wrap=True)
    summary.add_column(style="bold white")
    summary.add_row("Chart", state.settings.chart_type)
    if dataset is not None:
        summary.add_row("Data", f"{dataset.column_count} columns x {dataset.row_count} rows")
    real = [s for s in spec["series"] if s.get("silent") is not True]
    summary.add_row("Series", f"{len(real)} real / {len(spec['series'])} total")
    names: List[str] = [str(s.get("name", "-")) for s in real]
    if names:
        summary.add_row("Names", _trim(", ".join(names)))
    x_axes = spec.get("xAxis")
    if isinstance(x_axes, list):
        summary.add_row("Axes", f"{len(x_axes)} x / {len(spec['yAxis'])} y")
    summary.add_row("Output", output or "stdout")
    return summary


def _write(payload: Dict[str, Any], output: Optional[str]) -> None:
    text = json.dumps(payload, ensure_ascii=False, indent=2, allow_nan=False)
    if output:
        Path(output).write_text(text + "\n", encoding="utf-8")
        logger.info("Wrote chart spec to %s", output)
    else:
        sys.stdout.write(text + "\n")


def main(argv: Optional[Sequence[str]] = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )

    path = Path(args.data_path)
    try:
        dataset = TableLoader().load(path.name, path.read_bytes())
        state = AppState(dataset=dataset, settings=settings_from_args(args))
        if args.transpose:
            state = state.transposed()
        spec = rebuild(state)
    except OSError as exc:
        console.print(Panel(str(exc), title="Cannot read input", border_style="red"))
        return 1
    except FigspecError as exc:
        console.print(Panel(str(exc), title=type(exc).__name__, border_style="red"))
        return 1

    _write(json_safe(spec), args.output)
    console.print(Panel(_summary(state, spec, args.output), title="Chart spec", border_style="green"))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
