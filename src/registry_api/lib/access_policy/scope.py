"""Bulk access scoping.

``build_scope`` turns a principal into a :class:`ScopePredicate` that the
record store translates into its own query filter. For every principal and
record, ``build_scope(p).matches(r)`` agrees with ``evaluate(p, r).allowed``.
"""

from registry_api.lib.access_policy.types import (
    GeoLevel,
    LevelMatch,
    MatchAll,
    MatchBarangay,
    MatchCity,
    MatchNone,
    MatchProvince,
    MatchRegion,
    Principal,
    ScopePredicate,
)

_LEVEL_PREDICATES: dict[GeoLevel, type[LevelMatch]] = {
    GeoLevel.REGION: MatchRegion,
    GeoLevel.PROVINCE: MatchProvince,
    GeoLevel.CITY: MatchCity,
    GeoLevel.BARANGAY: MatchBarangay,
}


def build_scope(principal: Principal) -> ScopePredicate:
    """Build the scoping predicate for list, search, and report queries.

    Args:
        principal: The resolved requesting principal.

    Returns:
        The predicate describing every record the principal may access.
    """
    if not principal.is_active:
        return MatchNone()
    if principal.is_super_admin:
        return MatchAll()

    scope = principal.assigned_geography
    if scope is None:
        return MatchNone()

    level = scope.geo_level
    if level is None:
        return MatchNone()
    if level == GeoLevel.NATIONAL:
        return MatchAll()

    code = scope.code_for(level)
    if code is None:
        return MatchNone()
    return _LEVEL_PREDICATES[level](code=code)


def describe_scope(predicate: ScopePredicate) -> dict[str, str | None]:
    """Serialize a predicate into a ``{"kind", "code"}`` mapping for diagnostics."""
    return {
        "kind": predicate.kind,
        "code": predicate.code if isinstance(predicate, LevelMatch) else None,
    }
