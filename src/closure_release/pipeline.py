"""
Release pipeline.

Sequences the release stages strictly in order and stops at the first
failure. The manifest is loaded once per run into an immutable snapshot and
handed to each stage explicitly.
"""

import logging
import subprocess
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from .compiler_probe import CompilerVersionProbe
from .diff_detector import VersionDiffDetector
from .exceptions import TestsFailed
from .git_client import GitClient
from .manifest import ManifestState, load_manifest
from .persistence import VersionPersister
from .registry import RegistryClient
from .release_check import is_release_needed, latest_published_version
from .utils import as_command, get_default_config, merge_config
from .version_calculator import compute_next_version
from .versions import Version


class Stage(Enum):
    TEST = "🧪 Running tests"
    DIFF = "🔍 Checking last commit for a version change"
    PROBE = "🔧 Probing compiler version"
    CALCULATE = "🧮 Calculating next version"
    PERSIST = "💾 Persisting version"
    REGISTRY = "🌐 Querying registry"
    COMPARE = "⚖️ Comparing with published versions"


@dataclass(frozen=True)
class ReleaseResult:
    """Outcome of a release-if-changed run."""
    current_version: Version
    next_version: Version
    already_bumped: bool
    compiler_version: Optional[Version] = None
    written: bool = False
    would_write: bool = False


@dataclass(frozen=True)
class ReleaseCheck:
    """Outcome of an is-release-needed check."""
    local_version: Version
    latest_published: Version
    release_needed: bool


class ReleasePipeline:
    """Runs the release stages against one package checkout."""

    def __init__(self, config: Optional[Dict[str, Any]] = None, dry_run: bool = False,
                 git: Optional[GitClient] = None,
                 probe: Optional[CompilerVersionProbe] = None,
                 registry: Optional[RegistryClient] = None):
        self.config = merge_config(get_default_config(), config or {})
        self.dry_run = dry_run
        self.logger = logging.getLogger(__name__)

        git_config = self.config['git']
        compiler_config = self.config['compiler']

        self.manifest_path = Path(self.config['manifest']['path'])
        self.git = git or GitClient(
            repo_dir=self.manifest_path.parent,
            executable=git_config['executable'],
            timeout=git_config.get('timeout')
        )
        self.probe = probe or CompilerVersionProbe(
            command=as_command(compiler_config['command']),
            timeout=compiler_config.get('timeout')
        )
        self._registry = registry
        self.detector = VersionDiffDetector(
            self.git,
            manifest_path=self.manifest_path.name,
            base=git_config['diff_base'],
            head=git_config['diff_head']
        )
        self.persister = VersionPersister(
            self.git,
            commit_template=git_config['commit_message'],
            dry_run=dry_run
        )

    @property
    def registry(self) -> RegistryClient:
        if self._registry is None:
            self._registry = RegistryClient(self.config['registry'])
        return self._registry

    def _enter(self, stage: Stage):
        self.logger.info(stage.value)

    def load_manifest(self) -> ManifestState:
        return load_manifest(self.manifest_path)

    def run_tests(self) -> None:
        """Run the configured test command; raise ``TestsFailed`` on failure."""
        self._enter(Stage.TEST)
        tests_config = self.config['tests']
        command: List[str] = as_command(tests_config['command'])
        try:
            result = subprocess.run(command, cwd=self.manifest_path.parent,
                                    timeout=tests_config.get('timeout'))
        except subprocess.TimeoutExpired as e:
            raise TestsFailed(f"Tests timed out after {tests_config.get('timeout')}s") from e
        except OSError as e:
            raise TestsFailed(f"Could not run tests: {e}") from e
        if result.returncode != 0:
            raise TestsFailed(f"Tests failed with exit code {result.returncode}")

    def plan_next_version(self, manifest: Optional[ManifestState] = None) -> ReleaseResult:
        """Diff, probe and calculate without writing anything."""
        manifest = manifest or self.load_manifest()

        self._enter(Stage.DIFF)
        already_bumped = self.detector.was_version_bumped_in_last_commit()

        compiler_version = None
        if not already_bumped:
            self._enter(Stage.PROBE)
            compiler_version = self.probe.probe_compiler_version()

        self._enter(Stage.CALCULATE)
        next_version = compute_next_version(already_bumped, manifest.version, compiler_version)

        return ReleaseResult(
            current_version=manifest.version,
            next_version=next_version,
            already_bumped=already_bumped,
            compiler_version=compiler_version
        )

    def release_if_changed(self, run_tests: bool = True) -> ReleaseResult:
        """Tests, diff, probe, calculate and persist, in that order."""
        if run_tests:
            self.run_tests()

        manifest = self.load_manifest()
        plan = self.plan_next_version(manifest)

        self._enter(Stage.PERSIST)
        would_write = self.persister.is_newer(manifest, plan.next_version)
        written = self.persister.apply_if_newer(manifest, plan.next_version)

        return ReleaseResult(
            current_version=plan.current_version,
            next_version=plan.next_version,
            already_bumped=plan.already_bumped,
            compiler_version=plan.compiler_version,
            written=written,
            would_write=would_write
        )

    def check_release_needed(self) -> ReleaseCheck:
        """Compare the manifest version with the latest published version."""
        manifest = self.load_manifest()

        self._enter(Stage.REGISTRY)
        published = self.registry.fetch_published_versions(self.config['registry']['package'])

        self._enter(Stage.COMPARE)
        latest = latest_published_version(published)
        needed = is_release_needed(manifest.version, published)
        self.logger.info(f"Local version {manifest.version}, latest published {latest}")

        return ReleaseCheck(local_version=manifest.version, latest_published=latest, release_needed=needed)
