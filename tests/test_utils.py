"""
Unit tests for configuration and logging helpers
"""
import logging
import pytest
from unittest.mock import patch

from closure_release.utils import (
    apply_env_overrides,
    as_command,
    get_default_config,
    load_config,
    merge_config,
    setup_logging
)


@pytest.fixture(autouse=True)
def no_dotenv():
    """Keep a developer's .env out of the tests"""
    with patch('closure_release.utils.load_dotenv'):
        yield


@pytest.fixture
def clean_env(monkeypatch):
    for name in ['MANIFEST_PATH', 'COMPILER_COMMAND', 'REGISTRY_URL', 'PACKAGE_NAME',
                 'REGISTRY_TIMEOUT', 'TEST_COMMAND', 'LOG_LEVEL', 'DEBUG_MODE']:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestLoadConfig:
    """Test configuration loading"""

    def test_missing_file_uses_defaults(self, clean_env, temp_dir):
        config = load_config(str(temp_dir / 'missing.yaml'))
        assert config == get_default_config()

    def test_file_values_override_defaults(self, clean_env, temp_dir):
        path = temp_dir / 'release.yaml'
        path.write_text("registry:\n  package: my-compiler\n", encoding='utf-8')

        config = load_config(str(path))

        assert config['registry']['package'] == 'my-compiler'
        assert config['registry']['url'] == 'https://registry.npmjs.org'
        assert config['manifest']['path'] == 'package.json'

    def test_empty_file_uses_defaults(self, clean_env, temp_dir):
        path = temp_dir / 'release.yaml'
        path.write_text("", encoding='utf-8')
        assert load_config(str(path)) == get_default_config()

    def test_malformed_file_falls_back(self, clean_env, temp_dir):
        path = temp_dir / 'release.yaml'
        path.write_text("registry: [unclosed\n", encoding='utf-8')
        assert load_config(str(path)) == get_default_config()

    def test_non_mapping_file_falls_back(self, clean_env, temp_dir):
        path = temp_dir / 'release.yaml'
        path.write_text("- just\n- a list\n", encoding='utf-8')
        assert load_config(str(path)) == get_default_config()


class TestEnvOverrides:
    """Test environment variable overrides"""

    def test_overrides_applied(self, clean_env):
        clean_env.setenv('MANIFEST_PATH', 'npm/package.json')
        clean_env.setenv('COMPILER_COMMAND', 'java -jar target/compiler.jar --version')
        clean_env.setenv('REGISTRY_TIMEOUT', '12.5')

        config = apply_env_overrides(get_default_config())

        assert config['manifest']['path'] == 'npm/package.json'
        assert config['compiler']['command'] == ['java', '-jar', 'target/compiler.jar', '--version']
        assert config['registry']['timeout'] == 12.5

    def test_debug_mode(self, clean_env):
        clean_env.setenv('DEBUG_MODE', 'true')
        assert apply_env_overrides(get_default_config())['logging']['level'] == 'DEBUG'

    def test_invalid_value_is_ignored(self, clean_env):
        clean_env.setenv('REGISTRY_TIMEOUT', 'soon')
        assert apply_env_overrides(get_default_config())['registry']['timeout'] == 30

    def test_timeout_can_be_disabled(self, clean_env):
        clean_env.setenv('REGISTRY_TIMEOUT', 'none')
        assert apply_env_overrides(get_default_config())['registry']['timeout'] is None


class TestHelpers:
    """Test small helpers"""

    def test_merge_config_is_recursive_and_pure(self):
        base = {'a': {'x': 1, 'y': 2}, 'b': 1}
        merged = merge_config(base, {'a': {'y': 3}})
        assert merged == {'a': {'x': 1, 'y': 3}, 'b': 1}
        assert base['a']['y'] == 2

    def test_as_command(self):
        assert as_command('npm test') == ['npm', 'test']
        assert as_command(('gulp', 'test')) == ['gulp', 'test']

    def test_setup_logging_file_handler(self, temp_dir):
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            logger = setup_logging({
                'level': 'DEBUG',
                'log_to_file': True,
                'logs_dir': str(temp_dir / 'logs'),
                'log_filename': 'release.log'
            })
            assert logger.level == logging.DEBUG
            assert any(isinstance(h, logging.handlers.RotatingFileHandler) for h in logger.handlers)
            assert (temp_dir / 'logs').is_dir()
        finally:
            for handler in root.handlers:
                handler.close()
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)
