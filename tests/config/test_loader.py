"""Tests for configuration file discovery and loading."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

import pytest
from pydantic import ValidationError

from license_intelligence.config.loader import (
    find_config_file,
    format_validation_errors,
    load_config,
    load_config_file,
)
from license_intelligence.exceptions import ConfigurationError
from license_intelligence.models.config import AnalyzerConfig
from license_intelligence.models.license import LicenseCategory, RiskLevel

POLICY_YAML = """\
policy:
  name: corporate
  prohibited_licenses: [AGPL-3.0-only]
  review_required_licenses: [GPL-3.0-only]
  category_rules:
    - category: copyleft
      action: review
  risk_tolerance:
    maximum_risk_level: medium
"""


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[..., Path]:
    """Provide a factory writing a config file under tmp_path."""

    def _write(content: str, name: str = "config.yaml") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


class TestFindConfigFile:
    """Tests for find_config_file."""

    @pytest.mark.parametrize(
        "name", [".license-intelligence.yaml", ".license-intelligence.yml"]
    )
    def test_finds_either_extension(
        self, write_config: Callable[..., Path], tmp_path: Path, name: str
    ) -> None:
        """Test both recognised file names are discovered."""
        config_file = write_config("project_name: demo\n", name)
        assert find_config_file(tmp_path) == config_file

    def test_yaml_wins_over_yml(
        self, write_config: Callable[..., Path], tmp_path: Path
    ) -> None:
        """Test the .yaml name is preferred when both exist."""
        preferred = write_config("project_name: first\n", ".license-intelligence.yaml")
        write_config("project_name: second\n", ".license-intelligence.yml")
        assert find_config_file(tmp_path) == preferred

    def test_missing_returns_none(self, tmp_path: Path) -> None:
        """Test an empty directory yields no config file."""
        assert find_config_file(tmp_path) is None

    def test_parent_directories_are_not_searched(
        self, write_config: Callable[..., Path], tmp_path: Path
    ) -> None:
        """Test discovery is limited to the given directory."""
        write_config("project_name: parent\n", ".license-intelligence.yaml")
        child = tmp_path / "child"
        child.mkdir()
        assert find_config_file(child) is None

    def test_defaults_to_cwd(
        self,
        write_config: Callable[..., Path],
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test the working directory is searched without start_dir."""
        config_file = write_config("project_name: demo\n", ".license-intelligence.yaml")
        monkeypatch.chdir(tmp_path)
        assert find_config_file() == config_file


class TestLoadConfigFile:
    """Tests for load_config_file."""

    def test_project_settings(self, write_config: Callable[..., Path]) -> None:
        """Test project name and ignored packages are loaded."""
        result = load_config_file(
            write_config("project_name: my-service\nignored_packages:\n  - internal-tool\n")
        )
        assert isinstance(result, AnalyzerConfig)
        assert result.project_name == "my-service"
        assert result.ignored_packages == ["internal-tool"]
        assert result.policy is None

    def test_policy_section(self, write_config: Callable[..., Path]) -> None:
        """Test the policy mapping is validated into a LicensePolicy."""
        policy = load_config_file(write_config(POLICY_YAML)).policy
        assert policy is not None
        assert policy.name == "corporate"
        assert policy.prohibited_licenses == {"AGPL-3.0-only"}
        assert policy.review_required_licenses == {"GPL-3.0-only"}
        assert policy.category_rules[0].category == LicenseCategory.COPYLEFT
        assert policy.risk_tolerance.maximum_risk_level == RiskLevel.MEDIUM

    @pytest.mark.parametrize("content", ["", "   \n", "# only a comment\n"])
    def test_blank_file_gives_defaults(
        self, write_config: Callable[..., Path], content: str
    ) -> None:
        """Test blank and comment-only files fall back to defaults."""
        assert load_config_file(write_config(content)) == AnalyzerConfig()

    @pytest.mark.parametrize(
        ("content", "expected"),
        [
            ("ignored_packages:\n  - pip\n  invalid yaml here", "Invalid YAML syntax"),
            ("- item1\n- item2\n", "expected a mapping at root level, got list"),
            ("unknown_field: value\n", "unknown_field"),
            ("ignored_packages: not_a_list\n", "ignored_packages"),
            (
                "policy:\n  name: p\n  category_rules:\n"
                "    - category: copyleft\n      action: forbid\n",
                "policy.category_rules.0.action",
            ),
            ("policy:\n  prohibited_licenses: [MIT]\n", "policy.name"),
        ],
    )
    def test_rejected_content(
        self, write_config: Callable[..., Path], content: str, expected: str
    ) -> None:
        """Test invalid content raises ConfigurationError naming the file."""
        config_file = write_config(content)
        with pytest.raises(ConfigurationError) as exc_info:
            load_config_file(config_file)
        assert expected in str(exc_info.value)
        assert str(config_file) in str(exc_info.value)

    def test_unreadable_path(self, tmp_path: Path) -> None:
        """Test a path that cannot be read raises ConfigurationError."""
        directory = tmp_path / "config.yaml"
        directory.mkdir()
        with pytest.raises(ConfigurationError, match="Cannot read configuration file"):
            load_config_file(directory)

    def test_unknown_policy_license_is_logged(
        self, write_config: Callable[..., Path], caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test policy ids missing from the license store produce a warning."""
        caplog.set_level(logging.WARNING, logger="license_intelligence")
        config = load_config_file(
            write_config(
                "policy:\n  name: corp\n"
                "  prohibited_licenses: [AGPL-3.0-only, Made-Up-1.0]\n"
            )
        )
        assert config.policy is not None
        assert "Made-Up-1.0" in config.policy.prohibited_licenses
        warnings = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "unknown license 'Made-Up-1.0'" in warnings[0]

    def test_known_policy_licenses_are_silent(
        self, write_config: Callable[..., Path], caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test a policy naming only bundled licenses logs no warnings."""
        caplog.set_level(logging.WARNING, logger="license_intelligence")
        load_config_file(write_config(POLICY_YAML))
        assert not [r for r in caplog.records if r.levelno == logging.WARNING]


class TestFormatValidationErrors:
    """Tests for format_validation_errors."""

    def test_joins_dotted_locations(self) -> None:
        """Test every error is rendered as 'loc: msg'."""
        with pytest.raises(ValidationError) as exc_info:
            AnalyzerConfig.model_validate(
                {"ignored_packages": "pip", "policy": {"name": 1}}
            )
        message = format_validation_errors(exc_info.value)
        parts = message.split("; ")
        assert len(parts) == 2
        assert parts[0].startswith("ignored_packages: ")
        assert parts[1].startswith("policy.name: ")


class TestLoadConfig:
    """Tests for load_config."""

    def test_explicit_path(self, write_config: Callable[..., Path]) -> None:
        """Test an explicit path is loaded."""
        config_file = write_config("project_name: custom\n", "custom-config.yaml")
        assert load_config(str(config_file)).project_name == "custom"

    def test_discovers_in_cwd(
        self,
        write_config: Callable[..., Path],
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test the working directory config is used without a path."""
        write_config("project_name: discovered\n", ".license-intelligence.yaml")
        monkeypatch.chdir(tmp_path)
        assert load_config().project_name == "discovered"

    def test_defaults_without_file(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test defaults are returned when nothing is found."""
        monkeypatch.chdir(tmp_path)
        assert load_config() == AnalyzerConfig()

    def test_explicit_path_beats_discovery(
        self,
        write_config: Callable[..., Path],
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test an explicit path takes precedence over a discovered file."""
        write_config("project_name: auto\n", ".license-intelligence.yaml")
        custom_dir = tmp_path / "custom"
        custom_dir.mkdir()
        custom_config = custom_dir / "my-config.yaml"
        custom_config.write_text("project_name: custom\n", encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        assert load_config(str(custom_config)).project_name == "custom"

    def test_invalid_discovered_file_raises(
        self,
        write_config: Callable[..., Path],
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test a discovered but invalid file is not silently ignored."""
        write_config("unknown_field: value\n", ".license-intelligence.yaml")
        monkeypatch.chdir(tmp_path)
        with pytest.raises(ConfigurationError):
            load_config()
