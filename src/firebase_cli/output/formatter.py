"""Render command results as a rich table, JSON, YAML or CSV."""

from __future__ import annotations

import csv
import io
from collections.abc import Sequence
from typing import Any

import typer
import yaml
from rich.console import Console

from firebase_cli.output.tables import cell_text, kv_table, make_table

console = Console()

FORMATS = ("table", "json", "yaml", "csv")


def to_plain(data: Any) -> Any:
    """Convert API models (and lists of them) to camelCase JSON-ready values."""
    if hasattr(data, "model_dump"):
        return data.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(data, (list, tuple)):
        return [to_plain(item) for item in data]
    return data


def output_json(data: Any) -> None:
    console.print_json(data=to_plain(data), default=str)


def output_yaml(data: Any) -> None:
    text = yaml.safe_dump(to_plain(data), default_flow_style=False, sort_keys=False)
    console.print(text, end="", markup=False, highlight=False)


def output_csv(columns: Sequence[str], rows: Sequence[Sequence[Any]]) -> None:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(columns)
    writer.writerows([cell_text(value) for value in row] for row in rows)
    console.print(buf.getvalue(), end="", markup=False, highlight=False)


def output(
    data: Any,
    fmt: str = "table",
    *,
    columns: Sequence[str] | None = None,
    rows: Sequence[Sequence[Any]] | None = None,
    title: str | None = None,
) -> None:
    """Print ``data`` in ``fmt``.

    Tables and CSV use ``columns``/``rows`` when given; a single record is
    shown as a key/value table, and CSV without rows falls back to JSON.
    """
    if fmt not in FORMATS:
        raise typer.BadParameter(
            f"Unknown format '{fmt}'. Choose from: {', '.join(FORMATS)}",
            param_hint="--format",
        )
    tabular = bool(columns) and rows is not None
    if fmt == "json" or (fmt == "csv" and not tabular):
        output_json(data)
    elif fmt == "yaml":
        output_yaml(data)
    elif fmt == "csv":
        output_csv(columns, rows)
    elif tabular:
        console.print(make_table(title, columns, rows))
    else:
        plain = to_plain(data)
        console.print(kv_table(plain, title=title) if isinstance(plain, dict) else plain)
