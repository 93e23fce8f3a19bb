"""
Staged Diff Reader

Reads the staged changes of a git repository.
"""

import asyncio
from pathlib import Path

import structlog

from commit_review.review.errors import GitError

logger = structlog.get_logger(__name__)


class StagedDiffReader:
    """Read staged changes with the git CLI."""

    def __init__(self, repo_path: str | Path | None = None):
        """Initialize reader with optional repo path."""
        self.repo_path = Path(repo_path) if repo_path else Path.cwd()

    async def get_staged_diff(self) -> str:
        """Staged diff with zero context lines."""
        return await self._run_git(["diff", "--cached", "-U0"])

    async def get_staged_files(self) -> list[str]:
        """Paths of staged files."""
        output = await self._run_git(["diff", "--cached", "--name-only"])
        return [f.strip() for f in output.split("\n") if f.strip()]

    async def repo_root(self) -> Path:
        """Top-level directory of the repository."""
        output = await self._run_git(["rev-parse", "--show-toplevel"])
        return Path(output.strip())

    async def _run_git(self, args: list[str]) -> str:
        """Run git command and return output."""
        cmd = ["git", "-C", str(self.repo_path)] + args

        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as e:
            raise GitError("git executable not found") from e

        stdout, stderr = await proc.communicate()

        if proc.returncode != 0:
            error_msg = stderr.decode(errors="replace").strip()
            logger.debug("Git command failed", args=args, error=error_msg)
            raise GitError(f"Git command failed: {error_msg}")

        return stdout.decode(errors="replace")
