"""Value objects — self-validating domain primitives."""

from __future__ import annotations

import re
from dataclasses import dataclass

from ruleset_validator.domain.exceptions import (
    InvalidBranchError,
    InvalidRepositoryNameError,
)

_CANONICAL_NAME_RE = re.compile(
    r"^(?P<owner>[A-Za-z0-9\-_.]+)/(?P<name>[A-Za-z0-9\-_.]+)$"
)
_DOT_SEGMENTS = frozenset({".", ".."})
_BAD_REF_RE = re.compile(r"^-|\.\.|[\x00-\x20\x7f~^:?*\[\\]")


@dataclass(frozen=True, slots=True)
class CanonicalName:
    """Validated ``owner/name`` repository identifier.

    Rejects anything with a missing half, extra path segments, ``.``/``..``
    segments, or characters GitHub does not allow in owner and repository
    names.
    """

    owner: str
    name: str

    @classmethod
    def from_string(cls, value: str) -> CanonicalName:
        """Parse and validate a raw ``owner/name`` string."""
        value = value.strip()
        match = _CANONICAL_NAME_RE.match(value)
        if not match or match["owner"] in _DOT_SEGMENTS or match["name"] in _DOT_SEGMENTS:
            raise InvalidRepositoryNameError(
                f"Invalid repository name: '{value}'. Expected format: <owner>/<name>"
            )
        return cls(owner=match["owner"], name=match["name"])

    def __str__(self) -> str:
        return f"{self.owner}/{self.name}"


def validate_branch(branch: str) -> str:
    """Return *branch* unchanged if it is usable as a git ref argument."""
    if not branch or _BAD_REF_RE.search(branch):
        raise InvalidBranchError(
            f"Invalid branch: '{branch}'. It must be a git ref that does not start with '-'"
        )
    return branch
