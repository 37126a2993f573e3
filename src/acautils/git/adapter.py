"""git / gh subprocess wrapper: clone, branches, checkout, commit, push."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)


class GitError(Exception):
    """Raised when git/gh is unavailable or returns an unexpected error."""


def _run(
    program: str,
    args: List[str],
    cwd: Optional[Path] = None,
    timeout: int = 300,
) -> str:
    """Run *program* with *args* and return stdout. Raises GitError on failure."""
    cmd = [program, *args]
    logger.debug("running %s", " ".join(cmd))
    try:
        result = subprocess.run(
            cmd,
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout,
            encoding="utf-8",
            errors="replace",
        )
    except FileNotFoundError:
        raise GitError(f"{program} is not installed or not on PATH")
    except subprocess.TimeoutExpired:
        raise GitError(f"{program} command timed out after {timeout}s: {' '.join(cmd)}")

    if result.returncode != 0:
        stderr = result.stderr.strip() or result.stdout.strip()
        raise GitError(f"{program} {args[0] if args else ''} failed: {stderr}".rstrip(": "))
    return result.stdout


def run_git(args: List[str], cwd: Path, timeout: int = 300) -> str:
    return _run("git", args, cwd=cwd, timeout=timeout)


def run_gh(args: List[str], cwd: Optional[Path] = None, timeout: int = 300) -> str:
    return _run("gh", args, cwd=cwd, timeout=timeout)


def run_gh_bytes(args: List[str], cwd: Optional[Path] = None, timeout: int = 300) -> bytes:
    """Like :func:`run_gh` but returns raw stdout (tarball downloads)."""
    cmd = ["gh", *args]
    logger.debug("running %s", " ".join(cmd))
    try:
        result = subprocess.run(cmd, cwd=cwd, capture_output=True, timeout=timeout)
    except FileNotFoundError:
        raise GitError("gh is not installed or not on PATH")
    except subprocess.TimeoutExpired:
        raise GitError(f"gh command timed out after {timeout}s: {' '.join(cmd)}")

    if result.returncode != 0 and not result.stdout:
        stderr = result.stderr.decode("utf-8", errors="replace").strip()
        raise GitError(f"gh {args[0] if args else ''} failed: {stderr}".rstrip(": "))
    if result.returncode != 0:
        logger.warning("gh exited with status %d; using the partial output", result.returncode)
    return result.stdout


def parse_branch_listing(output: str, remote: str = "origin") -> List[str]:
    """Turn ``git branch -r`` output into unique local branch names."""
    branches: List[str] = []
    seen: set[str] = set()
    for raw in output.replace("\r\n", "\n").strip().split("\n"):
        branch = raw.strip()
        if not branch or "HEAD" in branch:
            continue
        branch = branch.removeprefix("*").strip()
        branch = branch.removeprefix(f"{remote}/")
        if not branch or branch == remote or branch in seen:
            continue
        seen.add(branch)
        branches.append(branch)
    return branches


def list_remote_branches(repo_dir: Path) -> List[str]:
    """Return the remote branch names of the clone at *repo_dir*."""
    try:
        output = run_git(["branch", "-r", "--format=%(refname:short)"], cwd=repo_dir)
    except GitError:
        # git < 2.13 has no --format for branch
        output = run_git(["branch", "-r"], cwd=repo_dir)
    return parse_branch_listing(output)


def checkout(repo_dir: Path, branch: str, *, create: bool = False) -> None:
    args = ["checkout", "-b", branch] if create else ["checkout", branch]
    run_git(args, cwd=repo_dir)
