"""
Unit tests for pipeline configuration loading.
"""

from pathlib import Path

import pytest

from contact_pipeline.config import ConfigError, ConfigLoader, PipelineConfig, load_config, parse_config


class TestPipelineConfig:
    """Tests for configuration defaults and validation"""

    def test_defaults(self):
        config = load_config()

        assert config.source_name == "Raw Data"
        assert config.output_name == "Processed Data"
        assert config.error_log_name == "Error Log"
        assert config.batch_size == 50
        assert config.time_budget_seconds == 280
        assert config.resume_delay_seconds == 60
        assert config.backend == "csv"
        assert config.smtp is None
        assert config.resolved_checkpoint_path == Path("data") / ".checkpoint.json"

    @pytest.mark.parametrize("section", [
        {"batch_size": 0},
        {"time_budget_seconds": -5},
        {"resume_delay_seconds": -1},
        {"backend": "sheets"},
        {"source_name": ""},
    ])
    def test_invalid_values_rejected(self, section):
        with pytest.raises(ConfigError):
            parse_config(section)

    def test_checkpoint_path_override(self):
        config = PipelineConfig(checkpoint_path="state/cp.json")
        assert config.resolved_checkpoint_path == Path("state/cp.json")


class TestConfigLoader:
    """Tests for YAML loading"""

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "pipeline.yaml"
        path.write_text(
            "pipeline:\n"
            "  source_name: Contacts\n"
            "  batch_size: 25\n"
            "  notification_recipients: [a@example.com, b@example.com]\n"
            "  smtp:\n"
            "    host: smtp.example.com\n",
            encoding="utf-8",
        )

        config = ConfigLoader(path).load()

        assert config.source_name == "Contacts"
        assert config.batch_size == 25
        assert config.notification_recipients == ["a@example.com", "b@example.com"]
        assert config.smtp.host == "smtp.example.com"
        assert config.smtp.port == 587

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError) as exc_info:
            ConfigLoader(tmp_path / "missing.yaml")
        assert "not found" in str(exc_info.value)

    def test_missing_section(self, tmp_path):
        path = tmp_path / "pipeline.yaml"
        path.write_text("other: {}\n", encoding="utf-8")

        with pytest.raises(ConfigError):
            ConfigLoader(path).load()

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "pipeline.yaml"
        path.write_text("pipeline: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigError):
            ConfigLoader(path).load()

    def test_shipped_example_config_loads(self):
        path = Path(__file__).resolve().parents[2] / "config" / "pipeline.yaml"

        config = load_config(path)

        assert config.batch_size == 50
        assert config.time_budget_seconds == 280
