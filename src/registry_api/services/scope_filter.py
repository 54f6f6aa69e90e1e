"""Translate access scope predicates into SQLAlchemy filters.

The record store's side of bulk authorization: a :class:`ScopePredicate`
becomes a boolean clause over the geography columns of any model using
``GeoAttributionMixin``.
"""

from typing import Any

from sqlalchemy import ColumnElement, Select, false, true

from registry_api.lib.access_policy import GeoLevel, LevelMatch, MatchAll, ScopePredicate

_LEVEL_COLUMNS: dict[GeoLevel, str] = {
    GeoLevel.REGION: "region_code",
    GeoLevel.PROVINCE: "province_code",
    GeoLevel.CITY: "city_municipality_code",
    GeoLevel.BARANGAY: "barangay_code",
}


def scope_clause(model: type[Any], predicate: ScopePredicate) -> ColumnElement[bool]:
    """Build the WHERE clause restricting ``model`` rows to ``predicate``.

    Args:
        model: ORM class carrying the geography columns.
        predicate: Scope produced by ``build_scope``.

    Returns:
        A boolean clause. Anything other than a recognized match variant
        yields a clause that matches nothing.
    """
    if isinstance(predicate, MatchAll):
        return true()
    if isinstance(predicate, LevelMatch):
        column = getattr(model, _LEVEL_COLUMNS[predicate.level])
        # NULL columns never compare equal, so rows missing the code drop out
        return column == predicate.code
    return false()


def apply_scope(query: Select, model: type[Any], predicate: ScopePredicate) -> Select:
    """Constrain a select statement to the rows visible under ``predicate``."""
    return query.where(scope_clause(model, predicate))
