"""Shared test fixtures: sample trees, properties checkouts, temp git repos."""

from __future__ import annotations

import subprocess
import textwrap
from pathlib import Path

import pytest

_ENV_VARS = ("ACA_OUTPUT", "ACA_INCLUDE", "ACA_EXCLUDE", "ACA_STORE_PATH")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep ACA_* overrides from the developer's shell out of the tests."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def sample_properties() -> str:
    return "billing.adapter=0\nsearch.adapter=1\n# note\n"


@pytest.fixture
def config_tree(tmp_path: Path) -> Path:
    """A small repository tree with properties, YAML, and excluded files."""
    root = tmp_path / "tree"
    (root / "config").mkdir(parents=True)
    (root / "config" / "app.properties").write_text(
        textwrap.dedent("""\
            # Application configuration
            server.host=192.168.1.100
            server.port=8080
            database.host=10.0.0.5
            database.port=5432
            timeout=30
            # Comment with IP 172.16.0.1
        """)
    )
    (root / "service.yml").write_text(
        textwrap.dedent("""\
            service:
              host: "203.0.113.1"
              httpPort: 3000
              httpsPort: "3443"
        """)
    )
    (root / "node_modules" / "pkg").mkdir(parents=True)
    (root / "node_modules" / "pkg" / "settings.json").write_text('{"host": "10.9.9.9"}\n')
    (root / "README.md").write_text("Server runs on 10.1.1.1\n")
    return root


@pytest.fixture
def properties_checkout(tmp_path: Path, sample_properties: str) -> Path:
    """A checkout containing env/dev/parameters.properties."""
    root = tmp_path / "checkout"
    env_dir = root / "env" / "dev"
    env_dir.mkdir(parents=True)
    (env_dir / "parameters.properties").write_text(sample_properties)
    return root


@pytest.fixture
def tmp_git_repo(tmp_path: Path) -> Path:
    """Create a temporary git repository for integration tests."""
    repo = tmp_path / "repo"
    repo.mkdir()
    subprocess.run(["git", "init", str(repo)], capture_output=True, check=True)
    subprocess.run(
        ["git", "config", "user.email", "test@test.com"],
        cwd=repo, capture_output=True, check=True,
    )
    subprocess.run(
        ["git", "config", "user.name", "Test"],
        cwd=repo, capture_output=True, check=True,
    )
    readme = repo / "README.md"
    readme.write_text("# Test\n")
    subprocess.run(["git", "add", "."], cwd=repo, capture_output=True, check=True)
    subprocess.run(
        ["git", "commit", "-m", "init"],
        cwd=repo, capture_output=True, check=True,
    )
    return repo
