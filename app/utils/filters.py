from typing import Any, Optional

from sqlalchemy import or_
from sqlalchemy.sql.elements import ColumnElement


def search_filter(term: Optional[str], *columns: Any) -> Optional[ColumnElement[bool]]:
    """Case-insensitive substring match of ``term`` against any of ``columns``.

    LIKE wildcards in the term are matched literally.
    """
    if not term:
        return None
    return or_(*(column.icontains(term, autoescape=True) for column in columns))


class FilterBuilder:
    """Collects WHERE clauses for the optional parameters that were supplied.

    A clause is only added when its value is not None, so an absent
    parameter contributes nothing rather than a match-anything clause.
    """

    def __init__(self) -> None:
        self.conditions: list[ColumnElement[bool]] = []

    def add(self, clause: Optional[ColumnElement[bool]]) -> "FilterBuilder":
        if clause is not None:
            self.conditions.append(clause)
        return self

    def equals(self, column: Any, value: Any) -> "FilterBuilder":
        if value is not None:
            self.conditions.append(column == value)
        return self

    def search(self, term: Optional[str], *columns: Any) -> "FilterBuilder":
        return self.add(search_filter(term, *columns))
