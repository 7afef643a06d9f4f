"""Tests for the repository cloner."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from trgchecks.git.clone import CloneError, Cloner
from trgchecks.models import Repository

REPO = Repository(name="demo", url="https://github.com/org/demo")


def test_clone_runs_shallow_git_clone(tmp_path: Path) -> None:
    calls = []

    def runner(args, timeout=None):
        calls.append((list(args), timeout))

    cloner = Cloner(runner=runner, timeout=42.0, temp_root=tmp_path)
    directory = cloner.clone(REPO)

    args, timeout = calls[0]
    assert args[:3] == ["git", "clone", "--quiet"]
    assert args[3:5] == ["--depth", "1"]
    assert args[-2:] == [REPO.url, str(directory)]
    assert timeout == 42.0
    assert directory.parent == tmp_path
    assert directory.is_dir()


def test_clone_without_depth_fetches_full_history(tmp_path: Path) -> None:
    calls = []
    cloner = Cloner(runner=lambda args, timeout=None: calls.append(list(args)), depth=None, temp_root=tmp_path)

    cloner.clone(REPO)

    assert "--depth" not in calls[0]


@pytest.mark.parametrize(
    "error",
    [
        subprocess.CalledProcessError(128, ["git"], stderr="fatal: repository not found"),
        subprocess.TimeoutExpired(["git"], 5),
        FileNotFoundError("git"),
    ],
)
def test_clone_failures_raise_clone_error_and_clean_up(tmp_path: Path, error: Exception) -> None:
    def runner(args, timeout=None):
        raise error

    cloner = Cloner(runner=runner, temp_root=tmp_path)

    with pytest.raises(CloneError):
        cloner.clone(REPO)

    assert list(tmp_path.iterdir()) == []


def test_clone_error_mentions_git_stderr(tmp_path: Path) -> None:
    def runner(args, timeout=None):
        raise subprocess.CalledProcessError(128, ["git"], stderr="fatal: repository not found\n")

    with pytest.raises(CloneError, match="repository not found"):
        Cloner(runner=runner, temp_root=tmp_path).clone(REPO)


def test_checkout_removes_directory_on_success_and_failure(tmp_path: Path) -> None:
    cloner = Cloner(runner=lambda args, timeout=None: None, temp_root=tmp_path)

    with cloner.checkout(REPO) as directory:
        (directory / "README.md").write_text("# demo", encoding="utf-8")
        kept = directory
    assert not kept.exists()

    with pytest.raises(RuntimeError):
        with cloner.checkout(REPO) as directory:
            kept = directory
            raise RuntimeError("check crashed")
    assert not kept.exists()
