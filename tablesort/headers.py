"""Per-column header formatting for sortable tables.

Every function here is pure: it takes a column and a ``SortState`` and
returns a new value, leaving the header list untouched.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable
from urllib.parse import urlencode

from werkzeug.datastructures import MultiDict

from tablesort.sort_state import ASC, DESC, ORDER_PARAM, SORT_PARAM, HeaderColumn, SortState

INDICATORS = {ASC: "▲", DESC: "▼"}
ARIA_SORT = {ASC: "ascending", DESC: "descending"}


@dataclass(frozen=True)
class HeaderCell:
    text: str
    sortable: bool = False
    active: bool = False
    direction: str | None = None
    indicator: str = ""
    aria_sort: str = "none"
    title: str = ""
    url: str | None = None


def is_active(column: HeaderColumn, state: SortState) -> bool:
    return column.label is not None and column.label == state.label


def proposed_direction(column: HeaderColumn, state: SortState) -> str:
    """Direction a click on the column header asks for: the flip of the active one, else asc."""
    if is_active(column, state):
        return ASC if state.direction == DESC else DESC
    return ASC


def build_sort_url(base_url: str, state: SortState, label: str, direction: str) -> str:
    params = MultiDict(state.preserved_params)
    params.setlist(SORT_PARAM, [direction])
    params.setlist(ORDER_PARAM, [label])
    return f"{base_url}?{urlencode(list(params.items(multi=True)))}"


def format_header(header: Any, state: SortState, base_url: str = "") -> HeaderCell:
    column = HeaderColumn.coerce(header)
    if not column.sortable:
        return HeaderCell(text=column.display)

    active = is_active(column, state)
    direction = proposed_direction(column, state)
    if active:
        title = "sort descending" if direction == DESC else "sort ascending"
        indicator = INDICATORS[state.direction]
        aria_sort = ARIA_SORT[state.direction]
    else:
        title = f"sort by {column.label}"
        indicator = ""
        aria_sort = "none"

    return HeaderCell(
        text=column.display,
        sortable=True,
        active=active,
        direction=direction,
        indicator=indicator,
        aria_sort=aria_sort,
        title=title,
        url=build_sort_url(base_url, state, column.label, direction),
    )


def header_cells(headers: Iterable[Any], state: SortState, base_url: str = "") -> list[HeaderCell]:
    return [format_header(header, state, base_url) for header in headers]


def cell_is_active(header: Any, state: SortState) -> bool:
    """Whether body cells under this header belong to the active sort column."""
    column = HeaderColumn.coerce(header)
    return column.sortable and is_active(column, state)
