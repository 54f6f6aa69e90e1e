"""Access checks for request handlers.

Thin wrappers over the access policy that add the logging the pure
evaluator does not do. Refusals are logged at DEBUG; they are an expected
outcome, not a failure.
"""

from loguru import logger

from registry_api.lib.access_policy import (
    AccessDecision,
    Principal,
    RecordGeography,
    ScopePredicate,
    build_scope,
    describe_scope,
    evaluate,
)


def check_record_access(
    principal: Principal,
    geography: RecordGeography,
    *,
    action: str,
    resource: str,
) -> AccessDecision:
    """Evaluate a principal against one record.

    Args:
        principal: The requesting principal.
        geography: The record's geographic attribution.
        action: Verb being authorized (read, create, update, delete).
        resource: Short description of the record, for the log line.

    Returns:
        The access decision.
    """
    decision = evaluate(principal, geography)
    if not decision.allowed:
        logger.debug(f"Denied {action} on {resource} for principal {principal.id}: {decision.reason}")
    return decision


def principal_scope(principal: Principal) -> ScopePredicate:
    """Build the bulk scope for a principal."""
    scope = build_scope(principal)
    logger.debug(f"Scope for principal {principal.id}: {describe_scope(scope)}")
    return scope
