"""Tests for ignore list and priority configuration."""

import pytest
import yaml
from pathlib import Path

from guardian_core.models.risk import Severity
from env_guardian.config.ignore import (
    DEFAULT_CONFIG_FILENAME,
    GuardianConfig,
    IgnoreManager,
    ScanSettings,
    create_default_config,
)


class TestIgnoreManager:
    """Tests for IgnoreManager."""

    @pytest.fixture
    def manager(self):
        return IgnoreManager()

    def _write_config(self, directory: Path, data) -> Path:
        config_file = directory / DEFAULT_CONFIG_FILENAME
        config_file.write_text(yaml.dump(data))
        return config_file

    def test_manager_initialization(self, manager):
        assert manager.config == GuardianConfig()
        assert manager.loaded_from is None

    def test_load_yaml_config(self, manager, tmp_path):
        config_file = self._write_config(tmp_path, {
            'ignore': {'variables': ['API_URL'], 'files': ['tests/**']},
            'scan': {'exclude_dirs': ['vendor'], 'min_severity': 'high'},
            'rules': ['extra-rules.yaml'],
        })

        assert manager.load(tmp_path) is True
        assert manager.loaded_from == config_file.resolve()
        assert manager.config.ignore.variables == ['API_URL']
        assert manager.config.ignore.files == ['tests/**']
        assert manager.config.scan.exclude_dirs == ['vendor']
        assert manager.config.min_severity == Severity.HIGH
        assert manager.config.rule_files == ['extra-rules.yaml']

    def test_load_from_parent_directory(self, manager, tmp_path):
        self._write_config(tmp_path, {'ignore': {'variables': ['PORT']}})
        nested = tmp_path / "apps" / "web"
        nested.mkdir(parents=True)

        assert manager.load(nested) is True
        assert manager.is_ignored(variable='PORT')

    def test_load_missing_config(self, manager, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        assert manager.load(tmp_path) is False
        assert manager.config == GuardianConfig()

    def test_load_null_sections(self, manager, tmp_path):
        (tmp_path / DEFAULT_CONFIG_FILENAME).write_text("ignore:\nscan:\nrules:\n")

        assert manager.load(tmp_path) is True
        assert manager.config.ignore.variables == []
        assert manager.config.min_severity == Severity.LOW

    @pytest.mark.parametrize("content", [
        "ignore: [API_KEY]\n",
        "ignore: API_KEY\n",
        "scan: [vendor]\n",
        "rules: 5\n",
        "ignore:\n  variables: API_KEY\n  files: 3\n",
        "scan:\n  exclude_dirs: vendor\n",
    ])
    def test_load_wrong_shaped_sections(self, manager, tmp_path, caplog, content):
        (tmp_path / DEFAULT_CONFIG_FILENAME).write_text(content)

        with caplog.at_level("WARNING"):
            assert manager.load(tmp_path) is True

        assert manager.config == GuardianConfig()
        assert "expected a" in caplog.text

    def test_wrong_shaped_section_keeps_valid_siblings(self, manager, tmp_path):
        self._write_config(tmp_path, {
            'ignore': {'variables': 'API_KEY', 'files': ['tests/**']},
            'scan': ['vendor'],
            'rules': ['extra-rules.yaml'],
        })

        assert manager.load(tmp_path) is True
        assert manager.config.ignore.variables == []
        assert manager.config.ignore.files == ['tests/**']
        assert manager.config.scan == ScanSettings()
        assert manager.config.rule_files == ['extra-rules.yaml']

    def test_load_invalid_yaml(self, manager, tmp_path):
        (tmp_path / DEFAULT_CONFIG_FILENAME).write_text("ignore: [unclosed")

        assert manager.load(tmp_path) is False

    def test_invalid_min_severity_falls_back_to_low(self):
        config = GuardianConfig(scan=ScanSettings(min_severity='urgent'))

        assert config.min_severity == Severity.LOW

    def test_ignore_variables_deduplicates(self, manager):
        assert manager.ignore_variables(['API_URL', 'PORT']) == ['API_URL', 'PORT']
        assert manager.ignore_variables(['PORT', ' ', 'apiBase']) == ['apiBase']
        assert manager.config.ignore.variables == ['API_URL', 'PORT', 'apiBase']

    def test_ignore_files_deduplicates(self, manager):
        assert manager.ignore_files(['src/a.js']) == ['src/a.js']
        assert manager.ignore_files(['src/a.js']) == []

    def test_reset_keeps_scan_settings(self, manager):
        manager.ignore_variables(['API_URL'])
        manager.ignore_files(['src/a.js'])
        manager.set_min_severity(Severity.HIGH)

        manager.reset()

        assert manager.config.ignore.variables == []
        assert manager.config.ignore.files == []
        assert manager.config.min_severity == Severity.HIGH

    def test_save_round_trip(self, manager, tmp_path):
        manager.ignore_variables(['API_URL'])
        manager.ignore_files(['tests/**'])
        manager.set_min_severity(Severity.MEDIUM)

        saved = manager.save(tmp_path / DEFAULT_CONFIG_FILENAME)

        reloaded = IgnoreManager()
        assert reloaded.load(tmp_path) is True
        assert reloaded.loaded_from == saved.resolve()
        assert reloaded.config == manager.config

    def test_save_defaults_to_loaded_file(self, manager, tmp_path):
        config_file = self._write_config(tmp_path, {'ignore': {'variables': []}})
        manager.load(tmp_path)
        manager.ignore_variables(['PORT'])

        assert manager.save() == config_file.resolve()
        assert 'PORT' in yaml.safe_load(config_file.read_text())['ignore']['variables']


class TestFileMatching:
    """File-level ignore matching."""

    @pytest.fixture
    def manager(self, tmp_path):
        manager = IgnoreManager()
        manager.load(tmp_path)
        return manager

    def test_exact_relative_path(self, manager, tmp_path):
        manager.ignore_files(['src/legacy.js'])

        assert manager.is_ignored(file=str(tmp_path / 'src' / 'legacy.js'))
        assert not manager.is_ignored(file=str(tmp_path / 'src' / 'app.js'))

    def test_absolute_path(self, manager, tmp_path):
        target = tmp_path / 'src' / 'legacy.js'
        manager.ignore_files([str(target)])

        assert manager.is_ignored(file=str(target))

    def test_directory_glob(self, manager, tmp_path):
        manager.ignore_files(['tests/**'])

        assert manager.is_ignored(file=str(tmp_path / 'tests' / 'unit' / 'a.test.js'))
        assert not manager.is_ignored(file=str(tmp_path / 'src' / 'a.js'))

    def test_recursive_name_glob(self, manager, tmp_path):
        manager.ignore_files(['**/*.test.js'])

        assert manager.is_ignored(file=str(tmp_path / 'src' / 'deep' / 'a.test.js'))
        assert not manager.is_ignored(file=str(tmp_path / 'src' / 'a.js'))

    def test_variable_check_does_not_need_file(self, manager):
        manager.ignore_variables(['API_URL'])

        assert manager.is_ignored(variable='API_URL')
        assert not manager.is_ignored(variable='PORT')
        assert not manager.is_ignored()


class TestCreateDefaultConfig:
    """Tests for the default config template."""

    def test_template_is_valid_yaml(self):
        data = yaml.safe_load(create_default_config())

        assert data['ignore'] == {'variables': [], 'files': []}
        assert data['scan']['min_severity'] == 'low'
        assert data['rules'] == []
