"""git / gh interface layer: fetching, branches, publishing."""

from acautils.git.adapter import (
    GitError,
    checkout,
    list_remote_branches,
    parse_branch_listing,
    run_gh,
    run_git,
)
from acautils.git.fetcher import (
    FetchError,
    clone_all_branches,
    extract_tarball,
    fetch_repo,
    validate_repo,
)
from acautils.git.publisher import PublishResult, publish

__all__ = [
    "FetchError",
    "GitError",
    "PublishResult",
    "checkout",
    "clone_all_branches",
    "extract_tarball",
    "fetch_repo",
    "list_remote_branches",
    "parse_branch_listing",
    "publish",
    "run_gh",
    "run_git",
    "validate_repo",
]
