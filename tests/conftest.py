"""
Test configuration and shared fixtures for closure-release tests
"""
import json
import pytest
import tempfile
import shutil
from pathlib import Path
from unittest.mock import Mock
import requests

from closure_release.git_client import GitClient


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests"""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path)


@pytest.fixture
def package_data():
    """Manifest contents in their on-disk key order"""
    return {
        'name': 'google-closure-compiler',
        'version': '1.5.0',
        'description': 'Check, compile, optimize and compress Javascript with Closure-Compiler',
        'main': 'index.js',
        'scripts': {
            'test': 'gulp test'
        }
    }


@pytest.fixture
def manifest_file(temp_dir, package_data):
    """Write a package.json into the temp directory"""
    path = temp_dir / 'package.json'
    path.write_text(json.dumps(package_data, indent=2) + '\n', encoding='utf-8')
    return path


@pytest.fixture
def mock_git():
    """GitClient double that records calls"""
    git = Mock(spec=GitClient)
    git.diff.return_value = ''
    return git


@pytest.fixture
def mock_response():
    """Create a mock registry HTTP response"""
    response = Mock(spec=requests.Response)
    response.status_code = 200
    response.json.return_value = {
        'name': 'google-closure-compiler',
        'versions': {
            '1.9.0': {'version': '1.9.0'},
            '2.0.0': {'version': '2.0.0'}
        }
    }
    response.raise_for_status = Mock()
    return response


@pytest.fixture
def sample_config(manifest_file):
    """Default configuration for tests"""
    return {
        'manifest': {
            'path': str(manifest_file)
        },
        'compiler': {
            'command': ['java', '-jar', 'compiler.jar', '--version'],
            'timeout': 5
        },
        'registry': {
            'url': 'https://registry.example.com',
            'package': 'google-closure-compiler',
            'timeout': 5
        },
        'tests': {
            'command': ['npm', 'test']
        },
        'logging': {
            'level': 'INFO',
            'log_to_file': False
        }
    }


def make_version_diff(old_version: str, new_version: str) -> str:
    """Unified diff of a package.json whose version changed"""
    return (
        'diff --git a/package.json b/package.json\n'
        'index 3b18e51..a9c2d6f 100644\n'
        '--- a/package.json\n'
        '+++ b/package.json\n'
        '@@ -1,6 +1,6 @@\n'
        ' {\n'
        '   "name": "google-closure-compiler",\n'
        f'-  "version": "{old_version}",\n'
        f'+  "version": "{new_version}",\n'
        '   "description": "Check, compile, optimize and compress Javascript with Closure-Compiler",\n'
        '   "main": "index.js",\n'
    )


@pytest.fixture
def make_diff():
    """Factory for manifest diffs"""
    return make_version_diff


@pytest.fixture
def version_diff():
    return make_version_diff('1.4.0', '1.5.0')
