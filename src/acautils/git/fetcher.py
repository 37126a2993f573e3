"""Repository acquisition: ``gh repo clone`` with a tarball fallback.

Both entry points are context managers yielding a temporary checkout that
is removed on exit.
"""

from __future__ import annotations

import io
import logging
import re
import shutil
import tarfile
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from acautils.git.adapter import GitError, run_gh, run_gh_bytes, run_git

logger = logging.getLogger(__name__)

MAX_MEMBER_SIZE = 100 * 1024 * 1024  # per-file cap for tarball extraction

_REPO_RE = re.compile(r"^[A-Za-z0-9_.\-]+/[A-Za-z0-9_.\-]+$")

_TMP_PREFIX = "aca-utils-"


class FetchError(GitError):
    """Raised when a repository cannot be acquired."""


def validate_repo(repo: str) -> str:
    """Return *repo* if it has the ``ORG/REPO`` shape."""
    repo = repo.strip()
    if not _REPO_RE.match(repo) or ".." in repo:
        raise FetchError(f"invalid repository {repo!r}: expected ORG/REPO")
    return repo


def _is_within(dest: Path, target: Path) -> bool:
    try:
        target.resolve().relative_to(dest.resolve())
    except ValueError:
        return False
    return True


def extract_tarball(data: bytes, dest: Path) -> int:
    """Extract a gzip tarball into *dest*; returns the number of files written.

    Entries with ``..`` components or resolving outside *dest* are dropped.
    Only directories and regular files are materialised.
    """
    written = 0
    try:
        archive = tarfile.open(fileobj=io.BytesIO(data), mode="r:gz")
    except tarfile.TarError as exc:
        raise FetchError(f"invalid tarball: {exc}") from exc

    with archive:
        for member in archive:
            if ".." in Path(member.name).parts or member.name.startswith("/"):
                logger.warning("skipping unsafe tar entry %s", member.name)
                continue
            target = dest / member.name
            if not _is_within(dest, target):
                logger.warning("skipping tar entry outside destination %s", member.name)
                continue

            if member.isdir():
                target.mkdir(mode=0o755, parents=True, exist_ok=True)
            elif member.isfile():
                target.parent.mkdir(mode=0o750, parents=True, exist_ok=True)
                source = archive.extractfile(member)
                if source is None:
                    continue
                with source, open(target, "wb") as out:
                    out.write(source.read(MAX_MEMBER_SIZE))
                written += 1
    return written


def _flatten_single_dir(dest: Path) -> None:
    """GitHub tarballs wrap everything in ``<org>-<repo>-<sha>/``; lift it."""
    entries = list(dest.iterdir())
    if len(entries) != 1 or not entries[0].is_dir():
        return
    top = entries[0]
    for child in top.iterdir():
        shutil.move(str(child), str(dest / child.name))
    try:
        top.rmdir()
    except OSError as exc:
        logger.warning("failed to remove %s: %s", top, exc)


def download_tarball(repo: str, ref: Optional[str], dest: Path) -> None:
    url = f"repos/{repo}/tarball/{ref}" if ref else f"repos/{repo}/tarball"
    data = run_gh_bytes(["api", "-H", "Accept: application/vnd.github+json", url])
    extract_tarball(data, dest)
    _flatten_single_dir(dest)


def clone_shallow(repo: str, ref: Optional[str], dest: Path) -> None:
    args = ["repo", "clone", repo, str(dest), "--", "--depth", "1"]
    if ref:
        args += ["--branch", ref]
    run_gh(args)


@contextmanager
def fetch_repo(repo: str, ref: Optional[str] = None) -> Iterator[Path]:
    """Yield a temporary checkout of *repo* at *ref* (default branch if None)."""
    repo = validate_repo(repo)
    with tempfile.TemporaryDirectory(prefix=_TMP_PREFIX) as tmp:
        dest = Path(tmp)
        try:
            clone_shallow(repo, ref, dest)
        except GitError as exc:
            logger.info("gh repo clone failed (%s); falling back to tarball download", exc)
            # a failed clone may leave partial content behind
            for child in dest.iterdir():
                if child.is_dir():
                    shutil.rmtree(child, ignore_errors=True)
                else:
                    child.unlink()
            try:
                download_tarball(repo, ref, dest)
            except GitError as tar_exc:
                raise FetchError(f"could not fetch {repo}: {tar_exc}") from tar_exc
        yield dest


@contextmanager
def clone_all_branches(repo: str) -> Iterator[Path]:
    """Yield a full clone of *repo* with every remote branch fetched."""
    repo = validate_repo(repo)
    with tempfile.TemporaryDirectory(prefix=_TMP_PREFIX) as tmp:
        dest = Path(tmp)
        try:
            run_gh(["repo", "clone", repo, str(dest)])
        except GitError as exc:
            raise FetchError(f"failed to clone repository {repo}: {exc}") from exc
        try:
            run_git(["fetch", "--all"], cwd=dest)
        except GitError as exc:
            logger.warning("failed to fetch all branches: %s", exc)
        yield dest
