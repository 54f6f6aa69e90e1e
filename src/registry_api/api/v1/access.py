"""Access diagnostics endpoints.

Let a caller see how the policy treats them: the decision and reason for a
given target geography, and their bulk scope.
"""

from fastapi import APIRouter, Depends

from registry_api.core.dependencies import get_current_principal
from registry_api.lib.access_policy import Principal, describe_scope, evaluate
from registry_api.schemas.access import AccessCheckRequest, AccessDecisionResponse, ScopeResponse
from registry_api.services.access_service import principal_scope

access_router = APIRouter(prefix="/access", tags=["access"])


@access_router.post("/check", response_model=AccessDecisionResponse)
async def check_access(
    request: AccessCheckRequest,
    principal: Principal = Depends(get_current_principal),
) -> AccessDecisionResponse:
    """Evaluate the caller against a target geography without touching any record."""
    decision = evaluate(principal, request.to_geography())
    return AccessDecisionResponse(allowed=decision.allowed, reason=decision.reason)


@access_router.get("/scope", response_model=ScopeResponse)
async def get_scope(
    principal: Principal = Depends(get_current_principal),
) -> ScopeResponse:
    """Return the caller's bulk access scope."""
    return ScopeResponse(**describe_scope(principal_scope(principal)))
