"""
Detects whether the last commit already changed the manifest version.
"""

import re
import logging
from pathlib import Path
from typing import Union

from .exceptions import DiffUnavailable, GitCommandError
from .git_client import GitClient

logger = logging.getLogger(__name__)

# Matches both the removed and the added line of a version change
VERSION_LINE_PATTERN = re.compile(r'^[+-]\s*"version": "[^"]+",$', re.MULTILINE)


def count_version_lines(diff_text: str) -> int:
    """Count diff lines that remove or add the version field."""
    return len(VERSION_LINE_PATTERN.findall(diff_text or ''))


def version_changed_in_diff(diff_text: str) -> bool:
    """
    True when exactly one version line was removed and one added.

    Any other count means "not changed". A count of one or more than two is
    ambiguous and logged as a warning rather than treated as an error.
    """
    count = count_version_lines(diff_text)
    if count not in (0, 2):
        logger.warning(f"Ambiguous manifest diff: {count} version line(s) changed; "
                       f"treating version as not bumped")
    return count == 2


class VersionDiffDetector:
    """Inspects the manifest diff between two commits."""

    def __init__(self, git: GitClient, manifest_path: Union[str, Path] = 'package.json',
                 base: str = 'HEAD^', head: str = 'HEAD'):
        self.git = git
        self.manifest_path = manifest_path
        self.base = base
        self.head = head

    def was_version_bumped_in_last_commit(self) -> bool:
        try:
            diff_text = self.git.diff(self.base, self.head, self.manifest_path)
        except GitCommandError as e:
            raise DiffUnavailable(f"Could not diff {self.manifest_path} between {self.base} and {self.head}: {e}") from e

        changed = version_changed_in_diff(diff_text)
        logger.debug(f"Version changed between {self.base} and {self.head}: {changed}")
        return changed
