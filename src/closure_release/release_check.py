"""
Compares the local version with the latest published one.
"""

from typing import Iterable

from .exceptions import EmptyVersionSet
from .versions import Version


def latest_published_version(published_versions: Iterable[Version]) -> Version:
    """Highest version under semver precedence."""
    published = list(published_versions)
    if not published:
        raise EmptyVersionSet("No published versions found; cannot determine the latest release")
    return max(published)


def is_release_needed(local_version: Version, published_versions: Iterable[Version]) -> bool:
    """True iff ``local_version`` is newer than every published version."""
    return local_version > latest_published_version(published_versions)
