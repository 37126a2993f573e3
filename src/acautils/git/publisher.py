"""Commit a toggled properties file to a new branch and open a pull request."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Optional, Sequence

from acautils.git.adapter import checkout, run_gh, run_git

DEFAULT_BRANCH_TEMPLATE = "toggle/adapters-{env}"
PR_BODY = "Automated via aca flip-adapters."


@dataclass(frozen=True)
class PublishResult:
    branch: str
    commit_message: str
    pr_title: Optional[str] = None


def commit_message(env: str, adapters: Sequence[str]) -> str:
    return f"chore(env:{env}): flip adapters {','.join(adapters)}"


def pr_title(env: str, adapters: Sequence[str]) -> str:
    return f"Flip adapters in {env}: {', '.join(adapters)}"


def publish(
    repo_dir: Path,
    rel_path: PurePosixPath,
    env: str,
    adapters: Sequence[str],
    *,
    branch: Optional[str] = None,
    branch_template: str = DEFAULT_BRANCH_TEMPLATE,
    open_pr: bool = False,
) -> PublishResult:
    """Create a branch, commit *rel_path*, push it, and optionally open a PR.

    Stops at the first failing step (GitError propagates).
    """
    branch = branch or branch_template.format(env=env)
    message = commit_message(env, adapters)

    checkout(repo_dir, branch, create=True)
    run_git(["add", str(rel_path)], cwd=repo_dir)
    run_git(["commit", "-m", message], cwd=repo_dir)
    run_git(["push", "-u", "origin", branch], cwd=repo_dir)

    title = None
    if open_pr:
        title = pr_title(env, adapters)
        run_gh(
            ["pr", "create", "--fill", "--title", title, "--body", PR_BODY],
            cwd=repo_dir,
        )
    return PublishResult(branch=branch, commit_message=message, pr_title=title)
