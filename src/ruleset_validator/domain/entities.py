"""Domain entities — plain data structures with no external dependencies."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from typing import ClassVar

from ruleset_validator.domain.exceptions import (
    InvalidRepositoryNameError,
    RepositoryStateError,
)
from ruleset_validator.domain.value_objects import CanonicalName, validate_branch

_UNSAFE_PATH_CHARS_RE = re.compile(r"[^A-Za-z0-9._-]")


@dataclass(frozen=True, slots=True)
class Repository:
    """A named, owned, branch-pinned source repository.

    ``disk_path`` is unset until the working copy has been materialized and
    is attached exactly once afterwards. Construction rejects owners, names
    and branches that are not safe to use as path segments or git refs.
    """

    name: str
    owner: str
    branch: str
    _disk_path: str | None = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        parsed = CanonicalName.from_string(f"{self.owner}/{self.name}")
        if (parsed.owner, parsed.name) != (self.owner, self.name):
            raise InvalidRepositoryNameError(
                f"Invalid repository name: '{self.owner}/{self.name}'"
            )
        validate_branch(self.branch)

    @classmethod
    def from_canonical_name(cls, canonical_name: str, branch: str) -> Repository:
        parsed = CanonicalName.from_string(canonical_name)
        return cls(name=parsed.name, owner=parsed.owner, branch=branch)

    @property
    def canonical_name(self) -> str:
        return f"{self.owner}/{self.name}"

    def url(self, base_url: str = "https://github.com") -> str:
        """Return the HTTPS clone URL under *base_url*."""
        return f"{base_url.rstrip('/')}/{self.canonical_name}.git"

    def checkout_dir(self, workspace_root: str) -> str:
        """Deterministic working-copy location for this identity."""
        branch_slug = _UNSAFE_PATH_CHARS_RE.sub("_", self.branch)
        root = os.path.normpath(workspace_root)
        target = os.path.normpath(os.path.join(root, self.owner, self.name, branch_slug))
        if os.path.commonpath([root, target]) != root or target == root:
            raise InvalidRepositoryNameError(
                f"Checkout of {self.canonical_name}@{self.branch} would escape {root}"
            )
        return target

    def is_checked_out(self) -> bool:
        return self._disk_path is not None

    @property
    def disk_path(self) -> str:
        if self._disk_path is None:
            raise RepositoryStateError(
                f"Repository {self.canonical_name}@{self.branch} is not checked out."
            )
        return self._disk_path

    def attach_disk_path(self, path: str) -> None:
        """Record where the working copy lives; rebinding to another path is an error."""
        if self._disk_path is not None and self._disk_path != path:
            raise RepositoryStateError(
                f"Repository {self.canonical_name}@{self.branch} is already "
                f"checked out at {self._disk_path}"
            )
        object.__setattr__(self, "_disk_path", path)


@dataclass(frozen=True, slots=True)
class ModuleDeclaration:
    """The top-level ``module()`` call of a MODULE.bazel file."""

    name: str
    line: int
    string_fields: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class RulesetRepository:
    """A checked-out repository that passed ruleset validation.

    Instances are only built by
    :class:`~ruleset_validator.services.create_ruleset_repository.CreateRulesetRepositoryUseCase`
    once every required file exists and the module name has been parsed.
    """

    TEMPLATE_DIR: ClassVar[str] = ".bcr"
    MODULE_FILE: ClassVar[str] = "MODULE.bazel"
    METADATA_TEMPLATE: ClassVar[str] = "metadata.template.json"
    PRESUBMIT: ClassVar[str] = "presubmit.yml"
    SOURCE_TEMPLATE: ClassVar[str] = "source.template.json"

    repository: Repository
    module_name: str
    canonical_name: str = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "canonical_name", self.repository.canonical_name)

    @property
    def name(self) -> str:
        return self.repository.name

    @property
    def owner(self) -> str:
        return self.repository.owner

    @property
    def branch(self) -> str:
        return self.repository.branch

    @property
    def disk_path(self) -> str:
        return self.repository.disk_path

    @property
    def module_file_path(self) -> str:
        return os.path.join(self.disk_path, self.MODULE_FILE)

    @property
    def metadata_template_path(self) -> str:
        return os.path.join(self.disk_path, self.TEMPLATE_DIR, self.METADATA_TEMPLATE)

    @property
    def presubmit_path(self) -> str:
        return os.path.join(self.disk_path, self.TEMPLATE_DIR, self.PRESUBMIT)

    @property
    def source_template_path(self) -> str:
        return os.path.join(self.disk_path, self.TEMPLATE_DIR, self.SOURCE_TEMPLATE)
