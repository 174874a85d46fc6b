"""Required-file manifest — every path a ruleset repository must contain."""

from __future__ import annotations

import os

from ruleset_validator.domain.entities import RulesetRepository
from ruleset_validator.domain.ports.filesystem import FileSystem

REQUIRED_FILES: tuple[str, ...] = (
    RulesetRepository.MODULE_FILE,
    os.path.join(RulesetRepository.TEMPLATE_DIR, RulesetRepository.METADATA_TEMPLATE),
    os.path.join(RulesetRepository.TEMPLATE_DIR, RulesetRepository.PRESUBMIT),
    os.path.join(RulesetRepository.TEMPLATE_DIR, RulesetRepository.SOURCE_TEMPLATE),
)


def find_missing_files(filesystem: FileSystem, disk_path: str) -> list[str]:
    """Return every required relative path absent under *disk_path*, in manifest order."""
    return [
        relative
        for relative in REQUIRED_FILES
        if not filesystem.exists(os.path.join(disk_path, relative))
    ]
