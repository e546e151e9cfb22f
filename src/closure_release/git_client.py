"""
Minimal git plumbing: diff, add and commit through the git executable.
"""

import logging
import subprocess
from pathlib import Path
from typing import List, Optional, Union

from .exceptions import GitCommandError


class GitClient:
    """Runs git commands in a working tree."""

    def __init__(self, repo_dir: Union[str, Path] = '.', executable: str = 'git', timeout: Optional[float] = 60):
        self.repo_dir = Path(repo_dir)
        self.executable = executable
        self.timeout = timeout
        self.logger = logging.getLogger(__name__)

    def _run(self, args: List[str]) -> str:
        cmd = [self.executable] + args
        self.logger.debug(f"Running: {' '.join(cmd)}")
        try:
            result = subprocess.run(
                cmd,
                cwd=self.repo_dir,
                check=True,
                capture_output=True,
                text=True,
                timeout=self.timeout
            )
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or '').strip()
            raise GitCommandError(f"git {args[0]} failed with exit code {e.returncode}: {stderr}") from e
        except subprocess.TimeoutExpired as e:
            raise GitCommandError(f"git {args[0]} timed out after {self.timeout}s") from e
        except OSError as e:
            raise GitCommandError(f"Could not run {self.executable}: {e}") from e
        return result.stdout

    def diff(self, base: str, head: str, path: Union[str, Path]) -> str:
        """Unified diff of a single path between two revisions."""
        return self._run(['diff', base, head, '--', str(path)])

    def add(self, path: Union[str, Path]) -> None:
        # Resolve against the caller's cwd; git runs inside repo_dir
        self._run(['add', '--', str(Path(path).resolve())])

    def commit(self, message: str) -> None:
        self._run(['commit', '-m', message])
