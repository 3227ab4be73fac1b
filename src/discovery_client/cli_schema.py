"""Schema describing important fields for CLI table rendering."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

Row = Mapping[str, Any]
ValueExtractor = Callable[[Row], Any]
ValueFormatter = Callable[[Any], str]
SortKey = Callable[[Row], Any]


@dataclass(frozen=True)
class Column:
    """Describe how to pull and format a column for Rich tables."""

    header: str
    keys: tuple[str, ...] = ()
    extractor: ValueExtractor | None = None
    formatter: ValueFormatter | None = None
    justify: str = "left"

    def render(self, row: Row) -> str:
        value: Any | None = None
        if self.keys:
            for key in self.keys:
                if key in row:
                    value = row.get(key)
                    if value is not None:
                        break
        if value is None and self.extractor:
            value = self.extractor(row)
        if value is None:
            return ""
        if self.formatter:
            formatted = self.formatter(value)
            return "" if formatted is None else str(formatted)
        return str(value)


@dataclass(frozen=True)
class TableView:
    """Describe a Rich table for a CLI command."""

    title: str
    columns: tuple[Column, ...]
    sort_key: SortKey | None = None
    rows_key: str | None = None


def _bool_formatter(value: Any) -> str:
    if value is None:
        return ""
    return "Yes" if bool(value) else "No"


def _truncate(*, max_chars: int = 60) -> ValueFormatter:
    def _formatter(value: Any) -> str:
        text = " ".join(str(value).split())
        return text if len(text) <= max_chars else text[: max_chars - 1] + "…"

    return _formatter


def _score_formatter(value: Any) -> str:
    if isinstance(value, (int, float)):
        return f"{value:.4f}"
    return str(value)


def _nested(*path: str) -> ValueExtractor:
    def _extractor(row: Row) -> Any:
        current: Any = row
        for key in path:
            if not isinstance(current, Mapping):
                return None
            current = current.get(key)
        return current

    return _extractor


def _result_title(row: Row) -> Any:
    for extractor in (
        _nested("extracted_metadata", "title"),
        _nested("extracted_metadata", "filename"),
        _nested("title"),
    ):
        value = extractor(row)
        if value:
            return value
    text = row.get("text")
    return text if text else None


def _sort_name(row: Row) -> str:
    return str(row.get("name") or "").lower()


def _metric_key(row: Row) -> Any:
    return row.get("key_as_string") or row.get("key")


CLI_TABLE_VIEWS: dict[str, TableView] = {
    "environments": TableView(
        title="Environments",
        rows_key="environments",
        columns=(
            Column("Name", keys=("name",)),
            Column("Environment ID", keys=("environment_id",)),
            Column("Status", keys=("status",)),
            Column("Size", keys=("size",)),
            Column("Read only", keys=("read_only",), formatter=_bool_formatter),
        ),
        sort_key=_sort_name,
    ),
    "collections": TableView(
        title="Collections",
        rows_key="collections",
        columns=(
            Column("Name", keys=("name",)),
            Column("Collection ID", keys=("collection_id",)),
            Column("Status", keys=("status",)),
            Column("Language", keys=("language",)),
            Column(
                "Documents",
                extractor=_nested("document_counts", "available"),
                justify="right",
            ),
            Column("Configuration", keys=("configuration_id",)),
        ),
        sort_key=_sort_name,
    ),
    "query_results": TableView(
        title="Query results",
        rows_key="results",
        columns=(
            Column("Document ID", keys=("id",)),
            Column(
                "Score",
                extractor=_nested("result_metadata", "score"),
                formatter=_score_formatter,
                justify="right",
            ),
            Column("Title", extractor=_result_title, formatter=_truncate()),
        ),
    ),
    "metrics": TableView(
        title="Metrics",
        columns=(
            Column("Interval", extractor=_metric_key),
            Column("Matching results", keys=("matching_results",), justify="right"),
            Column("Event rate", keys=("event_rate",), formatter=_score_formatter, justify="right"),
        ),
    ),
    "top_tokens": TableView(
        title="Top query tokens",
        columns=(
            Column("Token", keys=("key",)),
            Column("Matching results", keys=("matching_results",), justify="right"),
            Column("Event rate", keys=("event_rate",), formatter=_score_formatter, justify="right"),
        ),
    ),
}


__all__ = ["Column", "TableView", "CLI_TABLE_VIEWS"]
