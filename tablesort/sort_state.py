"""Resolve table sort state from a header description and query parameters."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field as dataclass_field
from typing import Any, Iterable, Mapping, Sequence, Tuple

from werkzeug.datastructures import ImmutableMultiDict, MultiDict

logger = logging.getLogger(__name__)

ASC = "asc"
DESC = "desc"

SORT_PARAM = "sort"
ORDER_PARAM = "order"


def normalize_direction(value: str | None) -> str:
    """Return ``desc`` only for a case-insensitive ``"desc"``; everything else is ``asc``."""
    if value is not None and str(value).lower() == DESC:
        return DESC
    return ASC


@dataclass(frozen=True)
class HeaderColumn:
    label: str | None = None
    field: str | None = None
    default_direction: str | None = None
    text: str | None = None

    def __post_init__(self) -> None:
        if self.default_direction is not None:
            object.__setattr__(self, "default_direction", normalize_direction(self.default_direction))

    @classmethod
    def coerce(cls, value: Any) -> "HeaderColumn":
        """
        Build a column from a header entry.

        Accepts an existing column, a plain string (a label-less text cell),
        or a mapping using the ``data``/``field``/``sort`` keys.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            return cls(
                label=value.get("data"),
                field=value.get("field"),
                default_direction=value.get("sort"),
            )
        if value is None:
            return cls()
        return cls(text=str(value))

    @property
    def display(self) -> str:
        return self.label or self.text or ""

    @property
    def sortable(self) -> bool:
        return bool(self.label and self.field)


@dataclass(frozen=True)
class SortState:
    label: str | None
    field: str | None
    direction: str
    preserved_params: ImmutableMultiDict = dataclass_field(default_factory=ImmutableMultiDict)


def _columns(headers: Iterable[Any]) -> list[HeaderColumn]:
    return [HeaderColumn.coerce(header) for header in headers]


def _select_column(columns: Sequence[HeaderColumn], requested_order: str | None) -> HeaderColumn | None:
    if requested_order is not None:
        for column in columns:
            if column.label is not None and column.label == requested_order:
                return column

    for column in columns:
        if column.default_direction is not None:
            return column

    if columns:
        return columns[0]
    return None


def resolve_order(headers: Iterable[Any], requested_order: str | None = None) -> Tuple[str | None, str | None]:
    """
    Return the ``(label, field)`` of the column the table is ordered by.

    The requested label wins when a column carries it, then the first column
    declaring a default direction, then the first column. An empty header
    list resolves to ``(None, None)``.
    """
    column = _select_column(_columns(headers), requested_order)
    if column is None:
        return None, None
    return column.label, column.field


def resolve_direction(
    headers: Iterable[Any],
    requested_sort: str | None = None,
    requested_order: str | None = None,
) -> str:
    if requested_sort is not None:
        return normalize_direction(requested_sort)

    column = _select_column(_columns(headers), requested_order)
    if column is not None and column.default_direction is not None:
        return column.default_direction
    return ASC


def compute_preserved_params(current: Mapping[str, Any] | None) -> MultiDict:
    """Copy the query parameters minus ``sort`` and ``order``, keeping key order."""
    preserved = MultiDict()
    if not current:
        return preserved

    if isinstance(current, MultiDict):
        items = current.items(multi=True)
    else:
        items = current.items()

    for key, value in items:
        if key in (SORT_PARAM, ORDER_PARAM):
            continue
        preserved.add(key, value)
    return preserved


def init_sort_state(headers: Iterable[Any], params: Mapping[str, Any] | None = None) -> SortState:
    """Build the sort state for one request from its header list and query parameters."""
    columns = _columns(headers)
    params = params or {}
    requested_order = params.get(ORDER_PARAM)
    requested_sort = params.get(SORT_PARAM)

    if not columns:
        logger.debug("Empty header list; sort state has no active column")

    label, field_key = resolve_order(columns, requested_order)
    direction = resolve_direction(columns, requested_sort, requested_order)

    return SortState(
        label=label,
        field=field_key,
        direction=direction,
        preserved_params=ImmutableMultiDict(compute_preserved_params(params)),
    )
