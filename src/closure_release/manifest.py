"""
Package manifest snapshot.

The manifest (``package.json``) is read once into an immutable
``ManifestState``. A new version produces a new snapshot; the file on disk is
only touched by ``write_manifest``.
"""

import os
import json
import logging
import tempfile
from copy import deepcopy
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Any, Union

from .exceptions import ManifestError, ParseFailed, PersistenceFailed
from .versions import Version, parse_version

logger = logging.getLogger(__name__)

VERSION_FIELD = 'version'


@dataclass(frozen=True)
class ManifestState:
    """Snapshot of the manifest file and its parsed version."""
    path: Path
    data: Dict[str, Any] = field(repr=False)
    version: Version

    def with_version(self, new_version: Version) -> 'ManifestState':
        """Return a copy with only the version field replaced."""
        data = deepcopy(self.data)
        data[VERSION_FIELD] = str(new_version)
        return ManifestState(path=self.path, data=data, version=new_version)


def load_manifest(path: Union[str, Path]) -> ManifestState:
    """Read and validate the manifest at ``path``."""
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ManifestError(f"Manifest not found: {path}") from e
    except (OSError, json.JSONDecodeError) as e:
        raise ManifestError(f"Could not read manifest {path}: {e}") from e

    if not isinstance(data, dict):
        raise ManifestError(f"Manifest {path} is not a JSON object")
    if VERSION_FIELD not in data:
        raise ManifestError(f"Manifest {path} has no '{VERSION_FIELD}' field")

    try:
        version = parse_version(data[VERSION_FIELD])
    except ParseFailed as e:
        raise ManifestError(f"Manifest {path} has an invalid version: {e}") from e

    logger.debug(f"Loaded manifest {path} at version {version}")
    return ManifestState(path=path, data=data, version=version)


def serialize_manifest(manifest: ManifestState) -> str:
    """Serialize with 2-space indentation, file key order and a trailing newline."""
    return json.dumps(manifest.data, indent=2, ensure_ascii=False) + '\n'


def write_manifest(manifest: ManifestState) -> None:
    """
    Atomically replace the manifest file with the snapshot's contents.

    The text is written to a temporary file in the same directory and moved
    over the target, so readers see either the old or the new file.
    """
    try:
        payload = serialize_manifest(manifest).encode('utf-8')
    except (TypeError, ValueError) as e:
        raise PersistenceFailed(f"Could not serialize manifest {manifest.path}: {e}") from e

    try:
        fd, temp_path = tempfile.mkstemp(prefix=f".{manifest.path.name}.", suffix='.tmp',
                                         dir=manifest.path.parent)
    except OSError as e:
        raise PersistenceFailed(f"Could not write manifest {manifest.path}: {e}") from e

    replaced = False
    try:
        with os.fdopen(fd, 'wb') as f:
            f.write(payload)
            f.flush()
            os.fsync(f.fileno())
        if manifest.path.exists():
            os.chmod(temp_path, manifest.path.stat().st_mode & 0o777)
        os.replace(temp_path, manifest.path)
        replaced = True
    except OSError as e:
        raise PersistenceFailed(f"Could not write manifest {manifest.path}: {e}") from e
    finally:
        if not replaced and os.path.exists(temp_path):
            os.unlink(temp_path)

    logger.debug(f"Wrote manifest {manifest.path} at version {manifest.version}")
