"""
npm registry client for published package versions.
"""

import logging
from typing import Any, Dict, Optional, Set

import requests

from .exceptions import ParseFailed, RegistryUnavailable
from .versions import Version, parse_version

DEFAULT_REGISTRY_URL = 'https://registry.npmjs.org'


def parse_published_versions(metadata: Any) -> Set[Version]:
    """Extract the set of versions from a registry metadata document."""
    if not isinstance(metadata, dict):
        raise RegistryUnavailable("Registry response is not a JSON object")

    versions = metadata.get('versions')
    if not isinstance(versions, dict):
        raise RegistryUnavailable("Registry response has no 'versions' mapping")

    published = set()
    for version_str in versions:
        try:
            published.add(parse_version(version_str))
        except ParseFailed as e:
            raise RegistryUnavailable(f"Registry lists an invalid version: {e}") from e
    return published


class RegistryClient:
    """Fetches package metadata from an npm-compatible registry."""

    def __init__(self, config: Optional[Dict[str, Any]] = None, session: Optional[requests.Session] = None):
        self.config = config or {}
        self.base_url = self.config.get('url', DEFAULT_REGISTRY_URL).rstrip('/')
        self.timeout = self.config.get('timeout', 30)
        self.session = session or requests.Session()
        self.session.headers.update({
            'User-Agent': self.config.get('user_agent', 'closure-release/1.0'),
            'Accept': 'application/json'
        })
        self.logger = logging.getLogger(__name__)

    def package_url(self, package: str) -> str:
        return f"{self.base_url}/{package}"

    def fetch_published_versions(self, package: str) -> Set[Version]:
        url = self.package_url(package)
        self.logger.debug(f"Fetching published versions: {url}")

        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise RegistryUnavailable(f"Could not query registry at {url}: {e}") from e

        try:
            metadata = response.json()
        except ValueError as e:
            raise RegistryUnavailable(f"Registry response from {url} is not valid JSON: {e}") from e

        published = parse_published_versions(metadata)
        self.logger.info(f"Registry lists {len(published)} published versions of {package}")
        return published

    def close(self):
        self.session.close()
