"""Shared pytest fixtures for all test modules."""

import io
import os
import subprocess
import sys

import pytest
from rich.console import Console

from gcloud_ssh.config import Settings
from gcloud_ssh.ui.render import Renderer
from tests.fakes import PUBLIC_KEY, FakeRunner

PROJECT_ROOT = os.path.normpath(os.path.join(os.path.dirname(__file__), ".."))


@pytest.fixture(scope="session")
def project_root():
    """Absolute path to the project root directory."""
    return PROJECT_ROOT


@pytest.fixture(scope="session")
def run_cli(project_root):
    """Return a callable that invokes the gcloud-ssh CLI as a subprocess."""

    def _run(*args, env=None):
        result = subprocess.run(
            [sys.executable, "-m", "gcloud_ssh.gcloud_ssh", *args],
            capture_output=True,
            text=True,
            cwd=project_root,
            env={**os.environ, **(env or {})},
            stdin=subprocess.DEVNULL,
        )
        return result.returncode, result.stdout, result.stderr

    return _run


@pytest.fixture
def fake_runner():
    """Return a factory for FakeRunner instances."""
    return FakeRunner


@pytest.fixture
def console():
    """Non-terminal rich console writing to an in-memory buffer."""
    return Console(file=io.StringIO(), width=100, height=40, color_system=None, force_terminal=False, highlight=False)


@pytest.fixture
def renderer(console):
    return Renderer(console=console, show_banner=False, tutorial=False, show_tips=False)


@pytest.fixture
def output(console):
    """Callable returning everything rendered to the test console so far."""
    return lambda: console.file.getvalue()


@pytest.fixture
def key_path(tmp_path):
    """Private key path whose public half already exists."""
    ssh_dir = tmp_path / ".ssh"
    ssh_dir.mkdir(mode=0o700)
    (ssh_dir / "id_rsa").write_text("PRIVATE\n")
    (ssh_dir / "id_rsa.pub").write_text(PUBLIC_KEY + "\n")
    return ssh_dir / "id_rsa"


@pytest.fixture
def settings(key_path):
    return Settings(key_path=str(key_path))
