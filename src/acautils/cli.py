"""aca CLI: Typer application with ip-port, flip-adapters, set-adapters, and init commands."""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING, Iterator, List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from acautils import __version__

if TYPE_CHECKING:
    from acautils.config.schema import AcaConfig
    from acautils.findings.models import ScanResult

app = typer.Typer(
    name="aca",
    help="IP/Port extraction + adapter toggler for GitHub repositories.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    pkg_logger = logging.getLogger("acautils")
    if not any(isinstance(h, RichHandler) for h in pkg_logger.handlers):
        pkg_logger.addHandler(
            RichHandler(console=console, show_time=False, show_path=False, markup=False)
        )
    pkg_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def _fail(label: str, message: object, code: int = 2) -> typer.Exit:
    console.print(f"[bold red]{label}:[/bold red] {message}")
    return typer.Exit(code=code)


def _load_cfg(config: Optional[str]) -> "AcaConfig":
    from acautils.config.loader import ConfigError, load_config

    try:
        return load_config(Path.cwd(), config)
    except ConfigError as exc:
        raise _fail("Config error", exc) from exc


def _resolve_mode(value: Optional[str], default: str, allowed: tuple) -> str:
    if value is None:
        return default
    mode = value.strip().lower()
    if mode not in allowed:
        raise _fail("Invalid output", f"{value} (expected {' | '.join(allowed)})")
    return mode


@contextmanager
def _checkout(repo: Optional[str], path: Optional[str], ref: Optional[str] = None) -> Iterator[Path]:
    """Yield a local directory: *path* as-is, or a temporary fetch of *repo*."""
    from acautils.git.adapter import GitError
    from acautils.git.fetcher import fetch_repo

    if path:
        local = Path(path)
        if not local.is_dir():
            raise _fail("Error", f"not a directory: {path}")
        yield local
        return
    assert repo is not None
    try:
        with fetch_repo(repo, ref) as root:
            yield root
    except GitError as exc:
        raise _fail("Fetch error", exc) from exc


def _emit(text: str) -> None:
    typer.echo(text.rstrip("\n"))


def _write_file(path: Path, display: object, content: str) -> None:
    """Replace *path* with *content* through a sibling temp file.

    The target is either fully rewritten or left as it was. Exits 1 on failure.
    """
    tmp: Optional[str] = None
    try:
        fd, tmp = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        if path.exists():
            shutil.copymode(path, tmp)
        else:
            os.chmod(tmp, 0o644)
        os.replace(tmp, path)
    except OSError as exc:
        if tmp is not None and os.path.exists(tmp):
            os.unlink(tmp)
        raise _fail("Write error", f"{display}: {exc.strerror or exc}", code=1) from exc


# ── ip-port ───────────────────────────────────────────────────────────────────


def _scan_all_branches(
    repo: str,
    includes: List[str],
    excludes: List[str],
    skip_comments: bool,
) -> "ScanResult":
    from acautils.findings.models import ScanResult
    from acautils.git.adapter import GitError, checkout, list_remote_branches
    from acautils.git.fetcher import clone_all_branches
    from acautils.scanner.engine import scan_tree

    combined = ScanResult()
    try:
        with clone_all_branches(repo) as root:
            branches = list_remote_branches(root)
            logger.debug("branches: %s", ", ".join(branches))
            for branch in branches:
                try:
                    checkout(root, branch)
                except GitError as exc:
                    logger.warning("failed to checkout branch %s: %s", branch, exc)
                    continue
                result = scan_tree(root, includes, excludes, skip_comments=skip_comments)
                result.records = [r.with_path(f"[{branch}] {r.file_path}") for r in result.records]
                combined.extend(result)
    except GitError as exc:
        raise _fail("Git error", exc) from exc
    return combined


@app.command("ip-port")
def ip_port(
    repo: Optional[str] = typer.Option(None, "--repo", help="Target repo as ORG/REPO"),
    path: Optional[str] = typer.Option(None, "--path", help="Scan a local directory instead of fetching --repo"),
    ref: Optional[str] = typer.Option(None, "--ref", help="Branch or tag (default: default branch)"),
    all_branches: bool = typer.Option(False, "--all-branches", help="Scan all branches in the repository"),
    include: Optional[str] = typer.Option(None, "--include", help="Comma-separated glob patterns to include"),
    exclude: Optional[str] = typer.Option(None, "--exclude", help="Comma-separated glob patterns to exclude"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Output: csv | table | json"),
    report: Optional[str] = typer.Option(None, "--report", "-r", help="Also write the report to this file"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .aca.toml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Scan repo for IP/Port key/value pairs across branches."""
    from acautils.output import OUTPUT_MODES, csv_report, json_report, table
    from acautils.scanner.engine import scan_tree
    from acautils.scanner.selector import split_csv

    _configure_logging(verbose)

    if not repo and not path:
        raise _fail("Error", "--repo ORG/REPO is required")
    if all_branches and not repo:
        raise _fail("Error", "--all-branches requires --repo")

    cfg = _load_cfg(config)
    mode = _resolve_mode(output, cfg.output.format, OUTPUT_MODES)
    includes = split_csv(include, cfg.scan.include)
    excludes = split_csv(exclude, cfg.scan.exclude)
    skip_comments = cfg.scan.skip_comments

    if all_branches:
        assert repo is not None
        result = _scan_all_branches(repo, includes, excludes, skip_comments)
    else:
        with _checkout(repo, path, ref) as root:
            result = scan_tree(root, includes, excludes, skip_comments=skip_comments)

    if mode == "csv":
        report_text = csv_report.render(result.records)
    elif mode == "table":
        report_text = table.render_records(result.records)
    else:
        report_text = json_report.render_records(result.records)
    _emit(report_text)

    if report:
        _write_file(Path(report), report, report_text)

    if verbose:
        console.print(f"[dim]Files scanned:[/dim]  {result.scanned_files}")
        console.print(f"[dim]Records:[/dim]        {result.total_records}")
        console.print(f"[dim]Skipped:[/dim]        {len(result.skipped_files)}")
        console.print(f"[dim]Duration:[/dim]       {result.scan_duration_ms:.0f}ms")


# ── flip-adapters ─────────────────────────────────────────────────────────────


def _resolve_adapters(adapters: Optional[str], cfg: "AcaConfig") -> List[str]:
    from acautils.adapters.store import AdapterStore, StoreError
    from acautils.scanner.selector import split_csv

    wanted = split_csv(adapters)
    if wanted:
        return wanted

    hint = "--adapters is required (comma list) or run 'aca set-adapters' to store adapters first"
    store = AdapterStore(Path(cfg.store.path) if cfg.store.path else None)
    try:
        stored = store.load()
    except StoreError as exc:
        raise _fail("Error", hint) from exc
    if not stored:
        raise _fail("Error", hint)
    return stored


def _read_properties(path: Path, display: PurePosixPath) -> str:
    try:
        return path.read_bytes().decode("utf-8")
    except OSError as exc:
        raise _fail("Read error", f"{display}: {exc.strerror or exc}", code=1) from exc
    except UnicodeDecodeError as exc:
        raise _fail("Read error", f"{display} is not valid UTF-8", code=1) from exc



@app.command("flip-adapters")
def flip_adapters(
    repo: Optional[str] = typer.Option(None, "--repo", help="Target repo as ORG/REPO (required)"),
    path: Optional[str] = typer.Option(None, "--path", help="Use a local checkout instead of fetching --repo"),
    env: Optional[str] = typer.Option(None, "--env", help="Environment directory under env/ (required)"),
    adapters: Optional[str] = typer.Option(
        None, "--adapters", help="Comma-separated adapter keys (or use stored adapters from 'set-adapters')",
    ),
    branch: Optional[str] = typer.Option(None, "--branch", help="Branch name to create (with --commit)"),
    commit: bool = typer.Option(False, "--commit", help="Commit the change to a new branch and push"),
    pr: bool = typer.Option(False, "--pr", help="Create a pull request (implies --commit)"),
    dry_run: Optional[bool] = typer.Option(
        None, "--dry-run/--no-dry-run", help="Show planned changes without writing [default: dry run]",
    ),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Output: table | json"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .aca.toml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Toggle adapter values (0↔1) in env/<ENV>/parameters.properties."""
    from acautils.adapters.toggle import REASON_NOT_FOUND, ToggleError, properties_path, toggle
    from acautils.git.adapter import GitError
    from acautils.git.publisher import publish
    from acautils.output import json_report, table

    _configure_logging(verbose)

    if not repo and not path:
        raise _fail("Error", "--repo ORG/REPO is required")
    if not env:
        raise _fail("Error", "--env is required (e.g., dev)")

    cfg = _load_cfg(config)
    wanted = _resolve_adapters(adapters, cfg)
    mode = _resolve_mode(output, cfg.output.flip_format, ("table", "json"))
    dry = cfg.flip.dry_run if dry_run is None else dry_run
    commit = commit or pr

    try:
        rel = properties_path(cfg.flip.properties_path, env)
    except ToggleError as exc:
        raise _fail("Error", exc) from exc

    with _checkout(repo, path) as root:
        prop_file = root / rel
        content = _read_properties(prop_file, rel)
        result = toggle(content, wanted, file_path=str(rel))

        for skip in result.skipped:
            if skip.reason == REASON_NOT_FOUND:
                console.print(f"[yellow]warning:[/yellow] adapter {skip.key!r} not found in {rel}")
            else:
                console.print(
                    f"[yellow]warning:[/yellow] adapter {skip.key!r} has non-binary value "
                    f"{skip.value!r}; skipping"
                )

        if not result.changed:
            if mode == "json":
                _emit(json_report.render_changes([]))
            else:
                _emit("No changes made.")
            raise typer.Exit(code=0)

        report_text = (
            json_report.render_changes(result.changes)
            if mode == "json"
            else table.render_changes(result.changes)
        )

        if dry:
            _emit(report_text)
            if commit:
                console.print("[dim]Dry run: --commit/--pr ignored; pass --no-dry-run to apply.[/dim]")
            raise typer.Exit(code=0)

        _write_file(prop_file, rel, result.content)
        _emit(report_text)

        if commit:
            names = [c.adapter for c in result.changes]
            try:
                published = publish(
                    root,
                    rel,
                    env.strip(),
                    names,
                    branch=branch,
                    branch_template=cfg.flip.branch_template,
                    open_pr=pr,
                )
            except GitError as exc:
                raise _fail("Git error", exc, code=1) from exc
            console.print(f"[green]✓[/green] Pushed branch {published.branch}")
            if published.pr_title:
                console.print(f"[green]✓[/green] Opened pull request: {published.pr_title}")


# ── set-adapters ──────────────────────────────────────────────────────────────


@app.command("set-adapters")
def set_adapters(
    adapters: Optional[str] = typer.Option(None, "--adapters", help="Comma-separated list of adapter names to store"),
    list_: bool = typer.Option(False, "--list", help="List currently stored adapters"),
    clear: bool = typer.Option(False, "--clear", help="Clear all stored adapters"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .aca.toml"),
) -> None:
    """Manage stored adapter lists for reuse in flip-adapters."""
    from acautils.adapters.store import AdapterStore, StoreError
    from acautils.scanner.selector import split_csv

    cfg = _load_cfg(config)
    store = AdapterStore(Path(cfg.store.path) if cfg.store.path else None)

    try:
        if list_:
            if not store.exists:
                typer.echo(
                    "No adapters stored yet. Use 'aca set-adapters --adapters adapter1,adapter2' "
                    "to store adapters."
                )
                return
            stored = store.load()
            if not stored:
                typer.echo(f"No adapters stored in {store.path}")
                return
            typer.echo(f"Stored adapters ({store.path}):")
            for name in stored:
                typer.echo(f"  - {name}")
            return

        if clear:
            store.clear()
            typer.echo(f"Cleared stored adapters from {store.path}")
            return

        if adapters is None or not adapters.strip():
            raise _fail("Error", "--adapters is required (comma-separated list)")

        saved = store.save(split_csv(adapters))
    except StoreError as exc:
        raise _fail("Error", exc, code=1) from exc

    typer.echo(f"Stored {len(saved)} adapter(s) in {store.path}:")
    for name in saved:
        typer.echo(f"  - {name}")


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init() -> None:
    """Generate a starter .aca.toml in the current directory."""
    from acautils.config.defaults import DEFAULT_TOML
    from acautils.config.loader import CONFIG_FILENAME

    config_path = Path.cwd() / CONFIG_FILENAME

    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"aca {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """aca: IP/port extraction and adapter toggling."""
