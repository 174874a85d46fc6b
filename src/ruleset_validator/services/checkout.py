"""Working-copy materialization."""

from __future__ import annotations

import logging

from ruleset_validator.domain.entities import Repository
from ruleset_validator.domain.ports.version_control import VersionControl

logger = logging.getLogger(__name__)


async def materialize(
    repository: Repository,
    version_control: VersionControl,
    workspace_root: str,
    base_url: str = "https://github.com",
) -> str:
    """Clone *repository* at its branch and return the working-copy path.

    Collaborator failures propagate unchanged.
    """
    if repository.is_checked_out():
        logger.debug("%s already checked out at %s", repository.canonical_name, repository.disk_path)
        return repository.disk_path

    target = repository.checkout_dir(workspace_root)
    logger.info(
        "Checking out %s@%s into %s", repository.canonical_name, repository.branch, target
    )
    await version_control.clone(repository.url(base_url), target, repository.branch)
    repository.attach_disk_path(target)
    return target
