"""Rich table rendering helpers."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from rich.table import Table


def cell_text(value: Any) -> str:
    """Flatten one value for a table or CSV cell; nested dicts become ``k=v`` pairs."""
    if value is None:
        return ""
    if isinstance(value, dict):
        return ", ".join(f"{k}={v}" for k, v in value.items())
    if isinstance(value, (list, tuple)):
        return ", ".join(cell_text(item) for item in value)
    return str(value)


def make_table(
    title: str | None,
    columns: Sequence[str],
    rows: Sequence[Sequence[Any]],
) -> Table:
    table = Table(title=title)
    for col in columns:
        table.add_column(col, overflow="fold")
    for row in rows:
        table.add_row(*(cell_text(cell) for cell in row))
    return table


def kv_table(record: dict[str, Any], *, title: str | None = None) -> Table:
    """Two-column table for a single record such as one project."""
    table = Table(title=title, show_header=False)
    table.add_column("Field", style="bold cyan", no_wrap=True)
    table.add_column("Value", overflow="fold")
    for key, value in record.items():
        table.add_row(key, cell_text(value))
    return table
