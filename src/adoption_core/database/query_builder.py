"""
Filtered pet search query composition.

``build_pet_filter_query`` turns the optional search criteria into one
select statement over the pets table. User input only ever travels as bound
parameter values; the statement text itself contains placeholders, never
the raw criteria.

Example:
    >>> query = build_pet_filter_query(category="Dogs", location="park")
    >>> query.params
    ['Dogs', '%park%']
    >>> print(query.statement)
    SELECT pets.pet_id, ... FROM pets
    WHERE pets.category_name = :category AND lower(pets.location) LIKE lower(:location) ESCAPE '\\'
    ORDER BY pets.pet_id
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional

from sqlalchemy import bindparam, select
from sqlalchemy.sql.expression import ColumnElement, Select

from ..models.pet import Pet

LIKE_ESCAPE = "\\"


def escape_like(value: str, escape: str = LIKE_ESCAPE) -> str:
    """Escape LIKE wildcards so user input only matches literally."""
    return (
        value.replace(escape, escape + escape)
        .replace("%", escape + "%")
        .replace("_", escape + "_")
    )


@dataclass
class PetFilterQuery:
    """A composed pet search: predicate clauses and their ordered parameters."""

    clauses: List[ColumnElement] = field(default_factory=list)
    params: List[Any] = field(default_factory=list)

    @property
    def is_filtered(self) -> bool:
        return bool(self.clauses)

    @property
    def statement(self) -> Select:
        """Select statement over pets with every clause joined by AND."""
        table = Pet.__table__
        stmt = select(table)
        if self.clauses:
            stmt = stmt.where(*self.clauses)
        return stmt.order_by(table.c.pet_id)

    def add_clause(self, clause: ColumnElement, value: Any) -> None:
        self.clauses.append(clause)
        self.params.append(value)


def build_pet_filter_query(
    category: Optional[str] = None, location: Optional[str] = None
) -> PetFilterQuery:
    """
    Compose the pet search predicate from optional criteria.

    Args:
        category: Exact category name to match
        location: Case-insensitive substring of the pet's location

    Returns:
        PetFilterQuery; with no criteria it selects every pet
    """
    table = Pet.__table__
    query = PetFilterQuery()

    if category:
        query.add_clause(
            table.c.category_name == bindparam("category", value=category), category
        )

    if location:
        pattern = f"%{escape_like(location)}%"
        query.add_clause(
            table.c.location.ilike(
                bindparam("location", value=pattern), escape=LIKE_ESCAPE
            ),
            pattern,
        )

    return query
