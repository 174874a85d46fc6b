"""Git CLI adapter — implements the VersionControl port."""

from __future__ import annotations

import asyncio
import logging
import os
from urllib.parse import urlsplit, urlunsplit

from ruleset_validator.domain.exceptions import GitCommandError

logger = logging.getLogger(__name__)

_MASK = "***"


class GitCliAdapter:
    """Concrete ``VersionControl`` that shells out to the ``git`` executable."""

    def __init__(
        self,
        executable: str = "git",
        token: str | None = None,
        timeout_seconds: float = 300.0,
    ) -> None:
        self._executable = executable
        self._token = token
        self._timeout = timeout_seconds

    async def clone(self, url: str, target_path: str, ref: str) -> None:
        """Bring *target_path* to the current remote state of *ref*.

        An existing clone is reused, but *ref* is always fetched again and
        checked out with local changes and untracked files discarded.
        """
        if ref.startswith("-"):
            raise GitCommandError(f"Refusing ref {ref!r} that looks like an option")

        remote = self._authenticated(url)
        if os.path.isdir(os.path.join(target_path, ".git")):
            logger.debug("Refreshing existing clone at %s", target_path)
            await self._run("remote", "set-url", "origin", remote, cwd=target_path)
        else:
            os.makedirs(os.path.dirname(target_path) or ".", exist_ok=True)
            await self._run("clone", "--quiet", "--no-checkout", remote, target_path)
        await self._run("fetch", "--quiet", "origin", ref, cwd=target_path)
        await self._run(
            "checkout", "--quiet", "--force", "--detach", "FETCH_HEAD", cwd=target_path
        )
        await self._run("clean", "--quiet", "-ffdx", cwd=target_path)

    def _authenticated(self, url: str) -> str:
        """Embed the token into HTTPS URLs as ``x-access-token`` credentials."""
        if not self._token:
            return url
        parts = urlsplit(url)
        if parts.scheme != "https" or "@" in parts.netloc:
            return url
        netloc = f"x-access-token:{self._token}@{parts.netloc}"
        return urlunsplit(parts._replace(netloc=netloc))

    def _mask(self, text: str) -> str:
        return text.replace(self._token, _MASK) if self._token else text

    async def _run(self, *args: str, cwd: str | None = None) -> str:
        """Run ``git <args>`` and return stdout, translating failures."""
        display = self._mask(" ".join(("git", *args)))
        env = {**os.environ, "GIT_TERMINAL_PROMPT": "0"}
        try:
            proc = await asyncio.create_subprocess_exec(
                self._executable,
                *args,
                cwd=cwd,
                env=env,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise GitCommandError(f"Could not start {display!r}: {exc}") from exc

        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), self._timeout)
        except asyncio.TimeoutError as exc:
            proc.kill()
            await proc.wait()
            raise GitCommandError(
                f"{display!r} timed out after {self._timeout:g}s"
            ) from exc

        if proc.returncode != 0:
            detail = self._mask(stderr.decode("utf-8", errors="replace").strip())
            raise GitCommandError(
                f"{display!r} exited with status {proc.returncode}: {detail}"
            )
        return stdout.decode("utf-8", errors="replace")
