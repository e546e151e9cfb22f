#!/usr/bin/env python3
"""
closure-release
===============

Release-version decisions for the Closure Compiler npm package.

Usage:
    from closure_release import ReleasePipeline

    pipeline = ReleasePipeline({'manifest': {'path': 'package.json'}})
    result = pipeline.release_if_changed()
"""

__version__ = "1.0.0"

from .exceptions import (
    ReleaseError,
    ManifestError,
    GitCommandError,
    DiffUnavailable,
    ProbeFailed,
    ParseFailed,
    RegistryUnavailable,
    EmptyVersionSet,
    TestsFailed,
    PersistenceFailed,
    CommitFailed
)
from .versions import Version, parse_version
from .version_calculator import compute_next_version
from .release_check import is_release_needed
from .pipeline import ReleasePipeline, ReleaseResult, ReleaseCheck

__all__ = [
    'ReleaseError',
    'ManifestError',
    'GitCommandError',
    'DiffUnavailable',
    'ProbeFailed',
    'ParseFailed',
    'RegistryUnavailable',
    'EmptyVersionSet',
    'TestsFailed',
    'PersistenceFailed',
    'CommitFailed',
    'Version',
    'parse_version',
    'compute_next_version',
    'is_release_needed',
    'ReleasePipeline',
    'ReleaseResult',
    'ReleaseCheck'
]
