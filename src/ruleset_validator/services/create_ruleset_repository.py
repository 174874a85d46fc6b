"""Create-ruleset-repository use case — checkout, validate, parse.

Depends only on the two ports (:class:`VersionControl` and
:class:`FileSystem`) and the pure service modules.  The interface layer
injects concrete adapters at runtime.
"""

from __future__ import annotations

import logging
import os

from ruleset_validator.domain.entities import Repository, RulesetRepository
from ruleset_validator.domain.exceptions import InvalidModuleFileError, MissingFilesError
from ruleset_validator.domain.ports.filesystem import FileSystem
from ruleset_validator.domain.ports.version_control import VersionControl
from ruleset_validator.services.checkout import materialize
from ruleset_validator.services.module_file_parser import parse_module_name
from ruleset_validator.services.required_files import find_missing_files

logger = logging.getLogger(__name__)


class CreateRulesetRepositoryUseCase:
    """Builds fully validated :class:`RulesetRepository` values.

    Parameters
    ----------
    version_control:
        Adapter that clones a repository and checks out a ref.
    filesystem:
        Adapter used for existence checks and reading MODULE.bazel.
    workspace_root:
        Directory under which every working copy is placed.
    base_url:
        Git host prefix used to build clone URLs.
    """

    def __init__(
        self,
        version_control: VersionControl,
        filesystem: FileSystem,
        workspace_root: str,
        base_url: str = "https://github.com",
    ) -> None:
        self._vcs = version_control
        self._fs = filesystem
        self._workspace_root = workspace_root
        self._base_url = base_url

    async def execute(self, name: str, owner: str, branch: str) -> RulesetRepository:
        """Check out ``owner/name@branch`` and return it once it passes validation.

        Raises :class:`MissingFilesError` listing every absent required file,
        or :class:`InvalidModuleFileError` if MODULE.bazel has no usable
        top-level module name.
        """
        return await self._create(Repository(name=name, owner=owner, branch=branch))

    async def execute_canonical(self, canonical_name: str, branch: str) -> RulesetRepository:
        """Same as :meth:`execute` for an ``owner/name`` string."""
        return await self._create(Repository.from_canonical_name(canonical_name, branch))

    async def _create(self, repository: Repository) -> RulesetRepository:
        disk_path = await materialize(
            repository, self._vcs, self._workspace_root, self._base_url
        )

        missing = find_missing_files(self._fs, disk_path)
        if missing:
            logger.warning(
                "%s is missing %d required file(s): %s",
                repository.canonical_name,
                len(missing),
                ", ".join(missing),
            )
            raise MissingFilesError(missing)

        module_file = os.path.join(disk_path, RulesetRepository.MODULE_FILE)
        try:
            module_name = parse_module_name(self._fs.read_text(module_file))
        except InvalidModuleFileError as exc:
            logger.warning(
                "%s has an invalid %s: %s",
                repository.canonical_name,
                RulesetRepository.MODULE_FILE,
                exc,
            )
            raise

        ruleset = RulesetRepository(repository=repository, module_name=module_name)
        logger.info("Validated %s (module %s)", ruleset.canonical_name, module_name)
        return ruleset
