"""
Semantic version helpers.

Thin layer over the ``semver`` package so the rest of the code raises
``ParseFailed`` instead of ``ValueError`` on malformed input.
"""

import semver

from .exceptions import ParseFailed


Version = semver.Version


def parse_version(version_str: str) -> Version:
    """Parse a canonical ``major.minor.patch[-pre][+build]`` string."""
    if not isinstance(version_str, str):
        raise ParseFailed(f"Version must be a string, got {type(version_str).__name__}")
    try:
        return Version.parse(version_str.strip())
    except ValueError as e:
        raise ParseFailed(f"Invalid semantic version '{version_str}': {e}") from e


def version_from_compiler_token(token: str) -> Version:
    """
    Promote the compiler's single version identifier to a full version.

    The wrapped compiler reports one incrementing number (``Version: v20150729``).
    ``token`` is the part after the ``v`` and becomes the major component:
    ``20150729.0.0``.
    """
    token = token.strip()
    if not (token.isascii() and token.isdecimal()):
        raise ParseFailed(f"Unable to parse compiler version number from '{token}'")
    return Version(int(token), 0, 0)
