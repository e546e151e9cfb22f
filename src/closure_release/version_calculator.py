"""
Next-version calculation.

Rules, applied in order:

1. The previous commit already bumped the version: keep it.
2. The compiler's major is ahead of ours: jump to ``<compiler major>.0.0``.
3. Anything else is a routine change: bump minor, reset patch.
"""

import logging
from enum import Enum
from typing import Optional, Tuple

from .versions import Version

logger = logging.getLogger(__name__)


class BumpKind(Enum):
    NONE = "none"
    MAJOR = "major"
    MINOR = "minor"


def decide_bump(already_bumped: bool, current_version: Version,
                compiler_version: Optional[Version]) -> Tuple[BumpKind, Version]:
    """Return which rule applied together with the resulting version."""
    if already_bumped:
        return BumpKind.NONE, current_version

    if compiler_version is None:
        raise ValueError("compiler_version is required when the version was not already bumped")

    # Only the major field is compared; the probe always reports minor/patch as zero
    if compiler_version.major > current_version.major:
        return BumpKind.MAJOR, Version(compiler_version.major, 0, 0)

    return BumpKind.MINOR, Version(current_version.major, current_version.minor + 1, 0)


def compute_next_version(already_bumped: bool, current_version: Version,
                         compiler_version: Optional[Version]) -> Version:
    """
    Compute the next package version.

    Args:
        already_bumped: Whether the last commit changed the manifest version
        current_version: Version currently in the manifest
        compiler_version: Probed compiler version; unused when already_bumped

    Returns:
        Version: ``current_version`` when already bumped, otherwise a
        strictly greater version
    """
    kind, next_version = decide_bump(already_bumped, current_version, compiler_version)

    if kind is BumpKind.NONE:
        logger.info("Previous commit incremented version number. No changes needed.")
    elif kind is BumpKind.MAJOR:
        logger.info("New compiler version detected. Increment major release.")
    else:
        logger.info("Changes detected. Increment minor release.")

    return next_version
