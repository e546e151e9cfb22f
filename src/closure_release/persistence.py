"""
Conditional persistence of a new manifest version.
"""

import logging

from .exceptions import CommitFailed, GitCommandError
from .git_client import GitClient
from .manifest import ManifestState, write_manifest
from .versions import Version

COMMIT_MESSAGE_TEMPLATE = "Increment version number to {version}"


def commit_message_for(version: Version, template: str = COMMIT_MESSAGE_TEMPLATE) -> str:
    return template.format(version=version)


class VersionPersister:
    """
    Writes a new version to the manifest and records it in git.

    Nothing is written unless the new version is strictly greater than the
    manifest's current version. If the commit fails after the file was
    written, the file is left in place and ``CommitFailed`` is raised.
    """

    def __init__(self, git: GitClient, commit_template: str = COMMIT_MESSAGE_TEMPLATE,
                 dry_run: bool = False):
        self.git = git
        self.commit_template = commit_template
        self.dry_run = dry_run
        self.logger = logging.getLogger(__name__)

    def is_newer(self, manifest: ManifestState, new_version: Version) -> bool:
        return new_version > manifest.version

    def apply_if_newer(self, manifest: ManifestState, new_version: Version) -> bool:
        """
        Persist ``new_version`` if it is newer than the manifest version.

        Returns:
            bool: True if a write occurred; always False in dry-run mode
        """
        if not self.is_newer(manifest, new_version):
            self.logger.debug(f"Version {new_version} is not newer than {manifest.version}; nothing to write")
            return False

        updated = manifest.with_version(new_version)
        message = commit_message_for(new_version, self.commit_template)

        if self.dry_run:
            self.logger.info(f"Dry run: would write {updated.path} and commit '{message}'")
            return False

        write_manifest(updated)

        try:
            self.git.add(updated.path)
            self.git.commit(message)
        except GitCommandError as e:
            raise CommitFailed(f"Wrote version {new_version} to {updated.path} but could not commit it: {e}") from e

        self.logger.info(f"New version committed: {new_version}")
        return True
