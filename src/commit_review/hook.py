"""Install commit-review as a git pre-commit hook."""

from dataclasses import dataclass
from pathlib import Path

import structlog

logger = structlog.get_logger(__name__)

HOOK_MARKER = "commit-review"


@dataclass
class HookInstallResult:
    """What ``install_hook`` did."""

    path: Path
    installed: bool
    already_installed: bool = False
    appended: bool = False


def install_hook(repo_root: str | Path, command: str = "commit-review") -> HookInstallResult:
    """
    Add the review command to ``.git/hooks/pre-commit``.

    An existing hook is extended rather than replaced. Nothing is written
    when the hook already runs commit-review.
    """
    hooks_dir = Path(repo_root) / ".git" / "hooks"
    hooks_dir.mkdir(parents=True, exist_ok=True)
    hook_path = hooks_dir / "pre-commit"

    if hook_path.exists():
        content = hook_path.read_text(encoding="utf-8")
        if HOOK_MARKER in content:
            logger.info("Hook already exists", path=str(hook_path))
            return HookInstallResult(path=hook_path, installed=False, already_installed=True)
        if not content.endswith("\n"):
            content += "\n"
        hook_path.write_text(f"{content}{command}\n", encoding="utf-8")
        appended = True
    else:
        hook_path.write_text(f"#!/bin/sh\n{command}\n", encoding="utf-8")
        appended = False

    hook_path.chmod(0o755)
    logger.info("Hook installed", path=str(hook_path), appended=appended)
    return HookInstallResult(path=hook_path, installed=True, appended=appended)
