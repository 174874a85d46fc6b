"""API routes — thin controllers that delegate to the use case."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ruleset_validator.interface.dependencies import get_use_case
from ruleset_validator.interface.schemas import (
    ErrorResponse,
    RulesetResponse,
    ValidateRequest,
)
from ruleset_validator.services.create_ruleset_repository import (
    CreateRulesetRepositoryUseCase,
)

router = APIRouter()


@router.post(
    "/rulesets/validate",
    response_model=RulesetResponse,
    responses={
        422: {"model": ErrorResponse, "description": "Invalid name, missing files or bad MODULE.bazel"},
        502: {"model": ErrorResponse, "description": "git clone / checkout failed"},
    },
)
async def validate_ruleset(
    body: ValidateRequest,
    use_case: CreateRulesetRepositoryUseCase = Depends(get_use_case),
) -> RulesetResponse:
    """Check out a ruleset repository and validate it."""
    ruleset = await use_case.execute_canonical(body.repository, body.branch)
    return RulesetResponse.from_entity(ruleset)
