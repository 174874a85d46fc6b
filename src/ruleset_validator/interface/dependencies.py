"""FastAPI dependency injection wiring."""

from __future__ import annotations

from functools import lru_cache

from ruleset_validator.infrastructure.config import Settings, get_settings
from ruleset_validator.infrastructure.git_cli_adapter import GitCliAdapter
from ruleset_validator.infrastructure.local_filesystem import LocalFileSystem
from ruleset_validator.services.create_ruleset_repository import (
    CreateRulesetRepositoryUseCase,
)

_git_adapter: GitCliAdapter | None = None
_filesystem: LocalFileSystem | None = None


async def startup() -> None:
    """Initialise shared resources — called from the lifespan context manager."""
    global _git_adapter, _filesystem  # noqa: PLW0603

    settings = get_settings()
    settings.workspace_dir.mkdir(parents=True, exist_ok=True)
    token = settings.github_token.get_secret_value() if settings.github_token else None
    _git_adapter = GitCliAdapter(
        executable=settings.git_executable,
        token=token,
        timeout_seconds=settings.git_timeout_seconds,
    )
    _filesystem = LocalFileSystem()


async def shutdown() -> None:
    """Release shared resources."""
    global _git_adapter, _filesystem  # noqa: PLW0603

    _git_adapter = None
    _filesystem = None


@lru_cache(maxsize=1)
def _settings() -> Settings:
    return get_settings()


def get_use_case() -> CreateRulesetRepositoryUseCase:
    """Build the use-case with injected adapters."""
    settings = _settings()

    assert _git_adapter is not None, "startup() was not called"
    assert _filesystem is not None, "startup() was not called"

    return CreateRulesetRepositoryUseCase(
        version_control=_git_adapter,
        filesystem=_filesystem,
        workspace_root=str(settings.workspace_dir),
        base_url=settings.github_base_url,
    )
