#!/usr/bin/env python3
"""
Release Exception Classes
"""

class ReleaseError(Exception):
    """Base exception for release decision errors"""
    pass

class ManifestError(ReleaseError):
    """Raised when the package manifest cannot be read or has no valid version"""
    pass

class GitCommandError(ReleaseError):
    """Raised when a git command exits non-zero or cannot be started"""
    pass

class DiffUnavailable(ReleaseError):
    """Raised when the manifest diff between the last two commits cannot be retrieved"""
    pass

class ProbeFailed(ReleaseError):
    """Raised when the compiler version probe cannot be run or exits non-zero"""
    pass

class ParseFailed(ReleaseError):
    """Raised when a version string or probe output cannot be parsed"""
    pass

class RegistryUnavailable(ReleaseError):
    """Raised when the package registry cannot be queried or returns an unusable body"""
    pass

class EmptyVersionSet(ReleaseError):
    """Raised when there are no published versions to compare against"""
    pass

class TestsFailed(ReleaseError):
    """Raised when the test command exits non-zero"""
    __test__ = False

class PersistenceFailed(ReleaseError):
    """Raised when the new version cannot be persisted"""

    def __init__(self, message: str, file_written: bool = False):
        super().__init__(message)
        self.file_written = file_written

class CommitFailed(PersistenceFailed):
    """Raised when the manifest was written but recording the commit failed"""

    def __init__(self, message: str):
        super().__init__(message, file_written=True)
