"""Domain exception hierarchy.

Each exception maps to a specific HTTP status code at the interface layer.
Inner layers raise these; the outermost error-handler translates them.
"""

from __future__ import annotations


class RulesetValidatorError(Exception):
    """Base exception for the entire application."""


# ── Input validation ────────────────────────────────────────────────────────


class InvalidRepositoryNameError(RulesetValidatorError):
    """The supplied name is not a valid ``owner/name`` pair."""


class InvalidBranchError(RulesetValidatorError):
    """The supplied branch cannot be a git ref, or would be read as an option."""


# ── Ruleset validation ──────────────────────────────────────────────────────


class MissingFilesError(RulesetValidatorError):
    """One or more required files are absent from the working copy."""

    def __init__(self, missing_files: list[str]) -> None:
        self.missing_files = list(missing_files)
        super().__init__(
            "Ruleset repository is missing required files: "
            + ", ".join(self.missing_files)
        )


class InvalidModuleFileError(RulesetValidatorError):
    """The module name could not be extracted from MODULE.bazel."""


# ── Collaborator errors ─────────────────────────────────────────────────────


class GitCommandError(RulesetValidatorError):
    """A git subprocess failed, timed out, or could not be started."""


class RepositoryStateError(RulesetValidatorError):
    """A repository was used before, or re-bound after, being checked out."""
