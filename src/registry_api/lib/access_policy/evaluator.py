"""Point access decisions for geographically attributed records.

``evaluate`` is a total, pure function: every combination of principal and
target yields an :class:`AccessDecision` and nothing is ever raised for a
refusal. Any case that cannot be positively matched is denied.
"""

from registry_api.lib.access_policy.types import (
    AccessDecision,
    DecisionReason,
    GeoLevel,
    Principal,
    RecordGeography,
)

# (allow reason, deny reason) for each level that compares a single code
_LEVEL_REASONS: dict[GeoLevel, tuple[DecisionReason, DecisionReason]] = {
    GeoLevel.REGION: (DecisionReason.REGION_MATCH, DecisionReason.REGION_MISMATCH),
    GeoLevel.PROVINCE: (DecisionReason.PROVINCE_MATCH, DecisionReason.PROVINCE_MISMATCH),
    GeoLevel.CITY: (DecisionReason.CITY_MATCH, DecisionReason.CITY_MISMATCH),
    GeoLevel.BARANGAY: (DecisionReason.BARANGAY_MATCH, DecisionReason.BARANGAY_MISMATCH),
}


def evaluate(principal: Principal, target: RecordGeography) -> AccessDecision:
    """Decide whether ``principal`` may read or write a record at ``target``.

    Args:
        principal: The resolved requesting principal.
        target: Geographic attribution of the record being accessed.

    Returns:
        An allow or deny decision with its reason tag.
    """
    if not principal.is_active:
        return AccessDecision.deny(DecisionReason.INACTIVE_PRINCIPAL)

    # Must stay ahead of any geography handling
    if principal.is_super_admin:
        return AccessDecision.allow(DecisionReason.SUPER_ADMIN_OVERRIDE)

    scope = principal.assigned_geography
    if scope is None:
        return AccessDecision.deny(DecisionReason.NO_ASSIGNED_GEOGRAPHY)

    level = scope.geo_level
    if level is None:
        return AccessDecision.deny(DecisionReason.UNKNOWN_LEVEL)
    if level == GeoLevel.NATIONAL:
        return AccessDecision.allow(DecisionReason.NATIONAL_SCOPE)

    allow_reason, deny_reason = _LEVEL_REASONS[level]
    own_code = scope.code_for(level)
    if own_code is None:
        return AccessDecision.deny(DecisionReason.NO_ASSIGNED_GEOGRAPHY)

    target_code = target.code_for(level)
    if target_code is not None and target_code == own_code:
        return AccessDecision.allow(allow_reason)
    return AccessDecision.deny(deny_reason)
