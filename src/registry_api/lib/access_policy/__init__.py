"""Access policy library — public API for geographic, role-based authorization.

Provides the point evaluator and the bulk scope builder, both pure functions
with no storage or I/O dependencies.
"""

from registry_api.lib.access_policy.evaluator import evaluate
from registry_api.lib.access_policy.scope import build_scope, describe_scope
from registry_api.lib.access_policy.types import (
    ROLE_DEFAULT_LEVELS,
    AccessDecision,
    DecisionReason,
    GeoLevel,
    GeoScope,
    LevelMatch,
    MatchAll,
    MatchBarangay,
    MatchCity,
    MatchNone,
    MatchProvince,
    MatchRegion,
    Principal,
    RecordGeography,
    Role,
    ScopePredicate,
    normalize_code,
)

__all__ = [
    "ROLE_DEFAULT_LEVELS",
    "AccessDecision",
    "DecisionReason",
    "GeoLevel",
    "GeoScope",
    "LevelMatch",
    "MatchAll",
    "MatchBarangay",
    "MatchCity",
    "MatchNone",
    "MatchProvince",
    "MatchRegion",
    "Principal",
    "RecordGeography",
    "Role",
    "ScopePredicate",
    "build_scope",
    "describe_scope",
    "evaluate",
    "normalize_code",
]
