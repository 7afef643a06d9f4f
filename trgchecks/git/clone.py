"""Shallow cloning of repositories into scoped temporary directories."""

from __future__ import annotations

import os
import shutil
import subprocess
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterable, Iterator

from ..logging import get_logger
from ..models import Repository


class CloneError(RuntimeError):
    """Raised when a repository cannot be cloned."""


class Cloner:
    """Clones repositories with git into fresh temporary directories."""

    def __init__(
        self,
        runner: Callable[..., None] | None = None,
        *,
        timeout: float | None = 300.0,
        depth: int | None = 1,
        temp_root: Path | None = None,
    ) -> None:
        self._runner = runner or self._default_runner
        self.timeout = timeout
        self.depth = depth
        self.temp_root = temp_root
        self.logger = get_logger("clone")

    def clone(self, repo: Repository) -> Path:
        """Clone `repo` and return the directory; the caller owns its removal."""
        directory = Path(
            tempfile.mkdtemp(
                prefix="trgchecks-",
                dir=str(self.temp_root) if self.temp_root else None,
            )
        )
        args = ["git", "clone", "--quiet"]
        if self.depth:
            args.extend(["--depth", str(self.depth)])
        args.extend([repo.url, str(directory)])

        self.logger.debug("Cloning %s into %s", repo.url, directory)
        try:
            self._runner(args, timeout=self.timeout)
        except subprocess.TimeoutExpired as exc:
            shutil.rmtree(directory, ignore_errors=True)
            raise CloneError(f"Cloning {repo.url} timed out after {exc.timeout}s") from exc
        except subprocess.CalledProcessError as exc:
            shutil.rmtree(directory, ignore_errors=True)
            detail = (exc.stderr or "").strip() or f"exit code {exc.returncode}"
            raise CloneError(f"Cloning {repo.url} failed: {detail}") from exc
        except OSError as exc:
            shutil.rmtree(directory, ignore_errors=True)
            raise CloneError(f"Cloning {repo.url} failed: {exc}") from exc
        return directory

    @contextmanager
    def checkout(self, repo: Repository) -> Iterator[Path]:
        """Yield a fresh clone of `repo`, removing it on exit."""
        directory = self.clone(repo)
        try:
            yield directory
        finally:
            shutil.rmtree(directory, ignore_errors=True)
            self.logger.debug("Removed clone of %s at %s", repo.name, directory)

    @staticmethod
    def _default_runner(args: Iterable[str], *, timeout: float | None = None) -> None:
        env = os.environ.copy()
        env["GIT_TERMINAL_PROMPT"] = "0"
        subprocess.run(
            list(args),
            check=True,
            text=True,
            capture_output=True,
            timeout=timeout,
            env=env,
        )


__all__ = ["CloneError", "Cloner"]
