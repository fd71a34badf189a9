import logging
from typing import Any, Mapping

from tablesort.sort_state import DESC, SortState

logger = logging.getLogger(__name__)


def order_by_sort_state(query, state: SortState, sortable: Mapping[str, Any]):
    """
    Order a SQLAlchemy query (or select) by the resolved sort column.

    ``sortable`` maps header field keys to column expressions. Only keys in
    that mapping are ever applied, so a field key from the header list never
    reaches SQL as text.
    """
    if not state.field:
        return query

    column = sortable.get(state.field)
    if column is None:
        logger.warning("Ignoring sort on unknown field %r", state.field)
        return query

    if state.direction == DESC:
        return query.order_by(column.desc())
    return query.order_by(column.asc())
