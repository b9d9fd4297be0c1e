"""
Console output: labels, raw documents, aggregation tables, and explain metrics.

Query results go to stdout through ``rich``; BSON values that have no plain
Python rendering (ObjectId, Decimal128, datetime, ...) are shown as strings.
"""

from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

console = Console(highlight=False)

SUCCESS = "Success"
NO_MATCH = "No match found"


def _sanitise_value(obj: Any) -> Any:
    """Recursively convert BSON-only types to printable representations."""
    if isinstance(obj, dict):
        return {k: _sanitise_value(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_sanitise_value(item) for item in obj]
    if isinstance(obj, (int, float, str, bool, type(None))):
        return obj
    # ObjectId, Decimal128, datetime, etc.
    return str(obj)


def clean_documents(results: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [_sanitise_value(doc) for doc in results]


def print_label(label: str) -> None:
    console.print()
    console.print(Text(label, style="bold"))


def print_documents(label: str, docs: List[Dict[str, Any]]) -> None:
    """Print a label followed by the raw documents."""
    print_label(label)
    console.print(clean_documents(docs))


def _table_columns(rows: List[Dict[str, Any]]) -> List[str]:
    """Union of keys across rows, ``_id`` first, otherwise first-seen order."""
    columns: List[str] = []
    for row in rows:
        for key in row:
            if key not in columns:
                columns.append(key)
    if "_id" in columns:
        columns.remove("_id")
        columns.insert(0, "_id")
    return columns


def print_table(label: str, rows: List[Dict[str, Any]]) -> None:
    """Print a label followed by the rows as a table (one column per key)."""
    print_label(label)
    cleaned = clean_documents(rows)
    table = Table(show_header=True, header_style="bold")
    table.add_column("(index)", justify="right")
    columns = _table_columns(cleaned)
    for column in columns:
        table.add_column(Text(column))
    for i, row in enumerate(cleaned):
        table.add_row(str(i), *(Text("" if c not in row else str(row[c])) for c in columns))
    console.print(table)


def print_outcome(label: str, succeeded: bool) -> None:
    console.print()
    console.print(Text(label, style="bold"), "→", SUCCESS if succeeded else NO_MATCH, markup=False)


def print_value(label: str, value: Any) -> None:
    console.print(Text(label, style="bold"), _sanitise_value(value), markup=False)


def print_metrics(
    before: Dict[str, Any],
    after: Dict[str, Any],
    winning_stage: Optional[str],
) -> None:
    """Print explain metrics gathered before and after the title index exists."""
    console.print()
    console.print(f"Before Index: Total Docs Examined = {before['total_docs_examined']}", markup=False)
    console.print(f"Before Index: Execution Time = {before['execution_time_ms']} ms", markup=False)
    console.print(f"After Index: Total Docs Examined = {after['total_docs_examined']}", markup=False)
    console.print(f"After Index: Execution Time = {after['execution_time_ms']} ms", markup=False)
    console.print(f"Winning Plan: {winning_stage}", markup=False)


def print_closing(message: str) -> None:
    console.print()
    console.print(message, markup=False)
