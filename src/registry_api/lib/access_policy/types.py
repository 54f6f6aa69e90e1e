"""Access policy value types.

Roles, geographic levels, principals, record attributions, decisions, and the
tagged scope predicates used to filter bulk queries. All types are immutable.
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import ClassVar


class Role(StrEnum):
    """Closed set of role tags a principal may hold."""

    SUPER_ADMIN = "super_admin"
    REGIONAL_ADMIN = "regional_admin"
    PROVINCIAL_ADMIN = "provincial_admin"
    CITY_ADMIN = "city_admin"
    BARANGAY_ADMIN = "barangay_admin"
    BARANGAY_USER = "barangay_user"


class GeoLevel(StrEnum):
    """Level of the geographic hierarchy, from most to least specific."""

    BARANGAY = "barangay"
    CITY = "city"
    PROVINCE = "province"
    REGION = "region"
    NATIONAL = "national"


class DecisionReason(StrEnum):
    """Diagnostic tag attached to every access decision."""

    SUPER_ADMIN_OVERRIDE = "super_admin_override"
    NATIONAL_SCOPE = "national_scope"
    REGION_MATCH = "region_match"
    PROVINCE_MATCH = "province_match"
    CITY_MATCH = "city_match"
    BARANGAY_MATCH = "barangay_match"
    INACTIVE_PRINCIPAL = "inactive_principal"
    NO_ASSIGNED_GEOGRAPHY = "no_assigned_geography"
    REGION_MISMATCH = "region_mismatch"
    PROVINCE_MISMATCH = "province_mismatch"
    CITY_MISMATCH = "city_mismatch"
    BARANGAY_MISMATCH = "barangay_mismatch"
    UNKNOWN_LEVEL = "unknown_level"


# Default level administered by each role when a profile carries no explicit level
ROLE_DEFAULT_LEVELS: dict[Role, GeoLevel] = {
    Role.REGIONAL_ADMIN: GeoLevel.REGION,
    Role.PROVINCIAL_ADMIN: GeoLevel.PROVINCE,
    Role.CITY_ADMIN: GeoLevel.CITY,
    Role.BARANGAY_ADMIN: GeoLevel.BARANGAY,
    Role.BARANGAY_USER: GeoLevel.BARANGAY,
}


def normalize_code(code: str | None) -> str | None:
    """Return ``code`` unchanged, or None when it is missing or blank.

    Codes are compared verbatim so that in-memory matching agrees with a plain
    column equality in the record store.
    """
    if code is None or not code.strip():
        return None
    return code


@dataclass(frozen=True)
class RecordGeography:
    """Geographic attribution carried by a resident, household, or profile row."""

    barangay_code: str | None = None
    city_code: str | None = None
    province_code: str | None = None
    region_code: str | None = None

    def code_for(self, level: GeoLevel) -> str | None:
        """Return the normalized code at ``level`` (None for national or missing)."""
        if level == GeoLevel.BARANGAY:
            return normalize_code(self.barangay_code)
        if level == GeoLevel.CITY:
            return normalize_code(self.city_code)
        if level == GeoLevel.PROVINCE:
            return normalize_code(self.province_code)
        if level == GeoLevel.REGION:
            return normalize_code(self.region_code)
        return None


@dataclass(frozen=True)
class GeoScope(RecordGeography):
    """The single jurisdiction a principal administers.

    ``level`` is kept as a plain string so that values read from storage which
    are not a known :class:`GeoLevel` still reach the evaluator and are denied.
    """

    level: str = GeoLevel.NATIONAL

    @property
    def geo_level(self) -> GeoLevel | None:
        """The level as a :class:`GeoLevel`, or None when unrecognized."""
        try:
            return GeoLevel(self.level)
        except ValueError:
            return None


@dataclass(frozen=True)
class Principal:
    """A resolved, authenticated actor. Built fresh for every request."""

    id: str
    role: str
    is_active: bool
    assigned_geography: GeoScope | None = None

    @property
    def is_super_admin(self) -> bool:
        return self.role == Role.SUPER_ADMIN


@dataclass(frozen=True)
class AccessDecision:
    """Outcome of a point access check. A refusal is a value, not an error."""

    allowed: bool
    reason: DecisionReason

    @classmethod
    def allow(cls, reason: DecisionReason) -> "AccessDecision":
        return cls(allowed=True, reason=reason)

    @classmethod
    def deny(cls, reason: DecisionReason) -> "AccessDecision":
        return cls(allowed=False, reason=reason)


@dataclass(frozen=True)
class ScopePredicate:
    """Storage-agnostic description of which records a principal may access."""

    kind: ClassVar[str] = "none"

    def matches(self, geography: RecordGeography) -> bool:
        raise NotImplementedError


@dataclass(frozen=True)
class MatchNone(ScopePredicate):
    """Matches no record."""

    kind: ClassVar[str] = "none"

    def matches(self, geography: RecordGeography) -> bool:
        return False


@dataclass(frozen=True)
class MatchAll(ScopePredicate):
    """Matches every record."""

    kind: ClassVar[str] = "all"

    def matches(self, geography: RecordGeography) -> bool:
        return True


@dataclass(frozen=True)
class LevelMatch(ScopePredicate):
    """Matches records whose code at ``level`` equals ``code``."""

    code: str
    level: ClassVar[GeoLevel]

    def matches(self, geography: RecordGeography) -> bool:
        target = geography.code_for(self.level)
        return target is not None and target == self.code


@dataclass(frozen=True)
class MatchRegion(LevelMatch):
    kind: ClassVar[str] = "region"
    level: ClassVar[GeoLevel] = GeoLevel.REGION


@dataclass(frozen=True)
class MatchProvince(LevelMatch):
    kind: ClassVar[str] = "province"
    level: ClassVar[GeoLevel] = GeoLevel.PROVINCE


@dataclass(frozen=True)
class MatchCity(LevelMatch):
    kind: ClassVar[str] = "city"
    level: ClassVar[GeoLevel] = GeoLevel.CITY


@dataclass(frozen=True)
class MatchBarangay(LevelMatch):
    kind: ClassVar[str] = "barangay"
    level: ClassVar[GeoLevel] = GeoLevel.BARANGAY
