"""
Shared fixtures: in-memory stand-ins for the version-control and filesystem
ports, plus MODULE.bazel builders.
"""

import os
from collections.abc import Callable

import pytest

from ruleset_validator.domain.entities import RulesetRepository
from ruleset_validator.services.create_ruleset_repository import (
    CreateRulesetRepositoryUseCase,
)

WORKSPACE = "/workspace"


# =============================================================================
# Fakes
# =============================================================================


class FakeFileSystem:
    """Dict-backed FileSystem."""

    def __init__(self) -> None:
        self.files: dict[str, str] = {}
        self.reads: list[str] = []

    def exists(self, path: str) -> bool:
        return path in self.files

    def read_text(self, path: str) -> str:
        self.reads.append(path)
        try:
            return self.files[path]
        except KeyError:
            raise FileNotFoundError(path) from None


class FakeVersionControl:
    """Records clone calls and runs *on_clone(target)* to populate the fake disk."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, str]] = []
        self.on_clone: Callable[[str], None] | None = None
        self.error: Exception | None = None

    async def clone(self, url: str, target_path: str, ref: str) -> None:
        self.calls.append((url, target_path, ref))
        if self.error is not None:
            raise self.error
        if self.on_clone is not None:
            self.on_clone(target_path)


# =============================================================================
# MODULE.bazel content
# =============================================================================


def fake_module_file(
    module_name: str = "rules_foo",
    *,
    missing_name: bool = False,
    invalid_contents: bool = False,
    deps: bool = False,
) -> str:
    if invalid_contents:
        return "garbage"
    name_line = "" if missing_name else f'    name = "{module_name}",\n'
    text = (
        "module(\n"
        f"{name_line}"
        '    version = "0.0.0",\n'
        "    compatibility_level = 1,\n"
        ")\n"
    )
    if deps:
        text += (
            '\nbazel_dep(name = "bazel_skylib", version = "1.1.1")\n'
            'bazel_dep(name = "platforms", version = "0.0.4")\n'
        )
    return text


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def filesystem() -> FakeFileSystem:
    return FakeFileSystem()


@pytest.fixture
def version_control() -> FakeVersionControl:
    return FakeVersionControl()


@pytest.fixture
def use_case(
    version_control: FakeVersionControl, filesystem: FakeFileSystem
) -> CreateRulesetRepositoryUseCase:
    return CreateRulesetRepositoryUseCase(
        version_control=version_control,
        filesystem=filesystem,
        workspace_root=WORKSPACE,
    )


@pytest.fixture
def mock_ruleset_files(
    version_control: FakeVersionControl, filesystem: FakeFileSystem
) -> Callable[..., None]:
    """Arrange for the next clone to produce a ruleset working copy."""

    def _arrange(
        *,
        module_name: str = "rules_foo",
        missing_module_name: bool = False,
        module_file_deps: bool = False,
        invalid_module_contents: bool = False,
        module_contents: str | None = None,
        skip_module_file: bool = False,
        skip_metadata_file: bool = False,
        skip_presubmit_file: bool = False,
        skip_source_file: bool = False,
    ) -> None:
        def on_clone(repo_path: str) -> None:
            template_dir = os.path.join(repo_path, RulesetRepository.TEMPLATE_DIR)
            if not skip_module_file:
                filesystem.files[os.path.join(repo_path, "MODULE.bazel")] = (
                    module_contents
                    if module_contents is not None
                    else fake_module_file(
                        module_name,
                        missing_name=missing_module_name,
                        invalid_contents=invalid_module_contents,
                        deps=module_file_deps,
                    )
                )
            if not skip_metadata_file:
                filesystem.files[os.path.join(template_dir, "metadata.template.json")] = "{}"
            if not skip_presubmit_file:
                filesystem.files[os.path.join(template_dir, "presubmit.yml")] = "tasks: {}"
            if not skip_source_file:
                filesystem.files[os.path.join(template_dir, "source.template.json")] = "{}"

        version_control.on_clone = on_clone

    return _arrange
