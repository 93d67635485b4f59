"""Tests for the directory walker."""

import os

import pytest
from pathlib import Path

from guardian_core.models.risk import Severity
from env_guardian.config.ignore import GuardianConfig, IgnoreManager, ScanSettings
from env_guardian.scanners.env_scanner import IGNORE_DIRS, EnvScanner, scan_for_env


class TestSampleProject:
    """End-to-end scan of the sample project fixture."""

    @pytest.fixture
    def result(self, sample_project_path):
        return EnvScanner().scan(sample_project_path)

    def test_existing_variables(self, result):
        for name in ("API_URL", "AUTH_TOKEN", "DATABASE_URL", "NPM_TOKEN"):
            assert result[name].usage, name

    def test_suggested_severities(self, result):
        assert result["apiKey"].max_severity == Severity.CRITICAL
        assert result["SECRET_KEY"].max_severity == Severity.CRITICAL
        assert result["dbUrl"].max_severity == Severity.HIGH
        assert result["apiBase"].max_severity == Severity.HIGH
        assert result["_authToken"].max_severity == Severity.HIGH
        assert result["userRegion"].max_severity == Severity.MEDIUM
        assert result["PORT"].max_severity == Severity.LOW

    def test_not_suggested(self, result):
        for name in ("colorTheme", "token", "baseUrl", "message", "DEBUG", "NODE_ENV"):
            assert name not in result

    def test_node_modules_skipped(self, result):
        assert "stripeSecret" not in result
        for entry in result.values():
            assert not any("node_modules" in s.file for s in entry.suggested)
            assert not any("node_modules" in path for path in entry.usage)

    def test_unsupported_files_skipped(self, result, sample_project_path):
        readme = str(sample_project_path / "README.md")
        for entry in result.values():
            assert all(s.file != readme for s in entry.suggested)

    def test_scanned_file_count(self, sample_project_path):
        scanner = EnvScanner()
        scanner.scan(sample_project_path)

        assert scanner.scanned_files == 7

    def test_env_file_value_and_code_usage_share_entry(self, result, sample_project_path):
        entry = result["API_URL"]

        assert entry.usage == [str(sample_project_path / "src" / "client.ts")]
        assert entry.suggested[0].file == str(sample_project_path / ".env")

    def test_scan_is_idempotent(self, sample_project_path):
        first = EnvScanner().scan(sample_project_path)
        second = EnvScanner().scan(sample_project_path)

        assert first.to_dict() == second.to_dict()


class TestEnvScanner:
    """Walker behavior on temporary trees."""

    def test_empty_directory(self, tmp_path):
        assert EnvScanner().scan(tmp_path) == {}

    def test_missing_root_raises(self, tmp_path):
        with pytest.raises(OSError):
            EnvScanner().scan(tmp_path / "missing")

    def test_single_file(self, tmp_path):
        path = tmp_path / "config.js"
        path.write_text('const userRegion = "us-east-1";')

        result = EnvScanner().scan(path)

        assert result["userRegion"].max_severity == Severity.MEDIUM

    def test_default_ignore_dirs(self, tmp_path):
        for directory in IGNORE_DIRS:
            (tmp_path / directory).mkdir()
            (tmp_path / directory / "config.js").write_text('const apiKey = "abc";')

        assert EnvScanner().scan(tmp_path) == {}

    def test_extra_exclude_dirs(self, tmp_path):
        (tmp_path / "vendor").mkdir()
        (tmp_path / "vendor" / "config.js").write_text('const apiKey = "abc";')
        (tmp_path / "app.js").write_text('const userRegion = "eu";')

        result = EnvScanner(exclude_dirs=["vendor"]).scan(tmp_path)

        assert "apiKey" not in result
        assert "userRegion" in result

    def test_same_name_in_many_files(self, tmp_path):
        (tmp_path / "a.js").write_text('const apiKey = "abc";')
        (tmp_path / "b").mkdir()
        (tmp_path / "b" / "c.py").write_text('apiKey = "sk_live_51HxYzAbCdEfGhIjKlMnOp"\n')

        entry = EnvScanner().scan(tmp_path)["apiKey"]

        assert sorted(s.file for s in entry.suggested) == [
            str(tmp_path / "a.js"),
            str(tmp_path / "b" / "c.py"),
        ]
        assert entry.max_severity == Severity.CRITICAL

    def test_same_url_in_two_files(self, tmp_path):
        for name in ("a.js", "b.js"):
            (tmp_path / name).write_text('const dbUrl = "https://api.example.com/db";\n')

        result = EnvScanner().scan(tmp_path)

        assert list(result) == ["dbUrl"]
        assert len(result["dbUrl"].suggested) == 2
        assert all(s.severity == Severity.HIGH for s in result["dbUrl"].suggested)

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
    def test_symlinked_directories_not_followed(self, tmp_path):
        real = tmp_path / "real"
        real.mkdir()
        (real / "config.js").write_text('const apiKey = "abc";')
        root = tmp_path / "root"
        root.mkdir()
        (root / "link").symlink_to(real, target_is_directory=True)

        assert EnvScanner().scan(root) == {}

    @pytest.mark.skipif(os.name == "nt" or os.geteuid() == 0, reason="needs POSIX permissions as non-root")
    def test_unreadable_file_is_skipped(self, tmp_path):
        locked = tmp_path / "locked.js"
        locked.write_text('const apiKey = "abc";')
        locked.chmod(0)
        (tmp_path / "open.js").write_text('const userRegion = "eu";')

        try:
            result = EnvScanner().scan(tmp_path)
        finally:
            locked.chmod(0o644)

        assert "apiKey" not in result
        assert "userRegion" in result


class TestScanForEnv:
    """Tests for the scan_for_env convenience function."""

    def test_without_config(self, sample_project_path):
        assert "apiKey" in scan_for_env(sample_project_path)

    def test_config_exclude_dirs(self, sample_project_path):
        config = GuardianConfig(scan=ScanSettings(exclude_dirs=["src"]))

        result = scan_for_env(str(sample_project_path), config)

        assert "apiKey" not in result
        assert "PORT" in result

    def test_config_rule_files(self, tmp_path):
        rules = tmp_path / "rules.yaml"
        rules.write_text("rules:\n  - pattern: '^ACME_'\n    severity: critical\n")
        (tmp_path / ".env").write_text("ACME_MODE=on\n")

        config = GuardianConfig(rule_files=[str(rules)])
        result = scan_for_env(tmp_path, config)

        assert result["ACME_MODE"].max_severity == Severity.CRITICAL

    def test_relative_rule_files_resolve_against_config_dir(self, tmp_path, monkeypatch):
        project = tmp_path / "project"
        project.mkdir()
        (project / "rules.yaml").write_text("rules:\n  - pattern: '^ACME_'\n    severity: critical\n")
        (project / ".env-guardian.yaml").write_text("rules:\n  - rules.yaml\n")
        (project / ".env").write_text("ACME_MODE=on\n")
        elsewhere = tmp_path / "elsewhere"
        elsewhere.mkdir()
        monkeypatch.chdir(elsewhere)

        manager = IgnoreManager()
        manager.load(project)
        result = scan_for_env(project, manager.config)

        assert result["ACME_MODE"].max_severity == Severity.CRITICAL
