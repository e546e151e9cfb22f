"""
Compiler version probe.

Runs the wrapped compiler in its version-report mode and extracts the
``Version: v<token>`` line, e.g.::

    Closure Compiler (http://github.com/google/closure-compiler)
    Version: v20150729
    Built on: 2015/07/29 19:59
"""

import re
import logging
import subprocess
from typing import List, Optional

from .exceptions import ParseFailed, ProbeFailed
from .versions import Version, version_from_compiler_token

VERSION_OUTPUT_PATTERN = re.compile(r'Version:\sv(.*)$', re.MULTILINE)

DEFAULT_COMMAND = ['java', '-jar', 'compiler.jar', '--version']


def parse_compiler_version(output: str) -> Version:
    """Extract the compiler version from probe output."""
    match = VERSION_OUTPUT_PATTERN.search(output or '')
    if not match:
        raise ParseFailed("Unable to parse compiler version number")
    return version_from_compiler_token(match.group(1))


class CompilerVersionProbe:
    """Invokes the compiler with its version flag."""

    def __init__(self, command: Optional[List[str]] = None, timeout: Optional[float] = 60):
        self.command = list(command) if command else list(DEFAULT_COMMAND)
        self.timeout = timeout
        self.logger = logging.getLogger(__name__)

    def probe_compiler_version(self) -> Version:
        self.logger.debug(f"Probing compiler version: {' '.join(self.command)}")
        try:
            result = subprocess.run(
                self.command,
                capture_output=True,
                text=True,
                timeout=self.timeout
            )
        except subprocess.TimeoutExpired as e:
            raise ProbeFailed(f"Compiler version probe timed out after {self.timeout}s") from e
        except OSError as e:
            raise ProbeFailed(f"Could not run compiler: {e}") from e

        if result.returncode != 0:
            raise ProbeFailed(f"Non-zero exit code: {result.returncode}")

        output = result.stdout or ''
        if not VERSION_OUTPUT_PATTERN.search(output):
            output = f"{output}\n{result.stderr or ''}"

        version = parse_compiler_version(output)
        self.logger.info(f"Compiler reports version {version}")
        return version
