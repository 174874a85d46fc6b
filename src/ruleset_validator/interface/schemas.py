"""Pydantic request / response DTOs for the API boundary."""

from __future__ import annotations

from pydantic import BaseModel, field_validator

from ruleset_validator.domain.entities import RulesetRepository


class ValidateRequest(BaseModel):
    """Request body for ``POST /rulesets/validate``."""

    repository: str
    branch: str = "main"

    @field_validator("repository", "branch")
    @classmethod
    def _must_not_be_blank(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            msg = "must not be empty."
            raise ValueError(msg)
        return stripped

    @field_validator("branch")
    @classmethod
    def _must_not_look_like_an_option(cls, v: str) -> str:
        if v.startswith("-"):
            msg = "must not start with '-'."
            raise ValueError(msg)
        return v


class RulesetResponse(BaseModel):
    """Successful response from ``POST /rulesets/validate``."""

    canonical_name: str
    module_name: str
    branch: str
    disk_path: str
    module_file_path: str
    metadata_template_path: str
    presubmit_path: str
    source_template_path: str

    @classmethod
    def from_entity(cls, ruleset: RulesetRepository) -> RulesetResponse:
        return cls(
            canonical_name=ruleset.canonical_name,
            module_name=ruleset.module_name,
            branch=ruleset.branch,
            disk_path=ruleset.disk_path,
            module_file_path=ruleset.module_file_path,
            metadata_template_path=ruleset.metadata_template_path,
            presubmit_path=ruleset.presubmit_path,
            source_template_path=ruleset.source_template_path,
        )


class ErrorResponse(BaseModel):
    """Standard error envelope returned on all failure paths."""

    status: str = "error"
    message: str
    missing_files: list[str] | None = None
