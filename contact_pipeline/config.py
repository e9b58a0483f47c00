"""
Pipeline configuration management.

Loads pipeline settings from a YAML file into a validated PipelineConfig.

Expected YAML format:
```yaml
pipeline:
  source_name: Raw Data
  output_name: Processed Data
  error_log_name: Error Log
  notification_recipients:
    - ops@example.com
  batch_size: 50
  time_budget_seconds: 280
  resume_delay_seconds: 60
  backend: csv
  data_dir: data
  checkpoint_path: data/.checkpoint.json
  smtp:
    host: smtp.example.com
    port: 587
    sender: contact-pipeline@example.com
```
"""

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError


class ConfigError(ValueError):
    """Raised when the configuration file is missing or invalid."""


class SmtpSettings(BaseModel):
    """SMTP server used by the email notifier."""

    host: str = Field(..., min_length=1)
    port: int = Field(587, gt=0)
    sender: str = "contact-pipeline@localhost"
    username: str | None = None
    password: str | None = None
    use_tls: bool = True


class PipelineConfig(BaseModel):
    """
    Recognized pipeline options.

    Attributes:
        source_name: Source table name
        output_name: Output table name
        error_log_name: Error log table name
        notification_recipients: Who gets completion/failure reports
        batch_size: Records per chunk
        time_budget_seconds: Elapsed time after which the run checkpoints
        resume_delay_seconds: Delay before the scheduled resumption
        backend: Where tables live ("csv" directory or "postgres")
        data_dir: Directory of CSV tables
        checkpoint_path: JSON checkpoint file (csv backend)
        smtp: SMTP settings; without them notifications are only logged
        log_level: Logging level
        log_format: "json" or "text"
    """

    source_name: str = Field("Raw Data", min_length=1)
    output_name: str = Field("Processed Data", min_length=1)
    error_log_name: str = Field("Error Log", min_length=1)
    notification_recipients: list[str] = Field(default_factory=list)
    batch_size: int = Field(50, gt=0)
    time_budget_seconds: float = Field(280.0, gt=0)
    resume_delay_seconds: float = Field(60.0, ge=0)
    backend: Literal["csv", "postgres"] = "csv"
    data_dir: Path = Path("data")
    checkpoint_path: Path | None = None
    smtp: SmtpSettings | None = None
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"

    @property
    def resolved_checkpoint_path(self) -> Path:
        return self.checkpoint_path or self.data_dir / ".checkpoint.json"


class ConfigLoader:
    """
    Loads a PipelineConfig from a YAML configuration file.
    """

    SECTION = "pipeline"

    def __init__(self, config_path: str | Path):
        """
        Initialize the config loader.

        Args:
            config_path: Path to the YAML configuration file
        """
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise ConfigError(f"Configuration file not found: {config_path}")

    def load(self) -> PipelineConfig:
        """
        Parse and validate the configuration file.

        Returns:
            PipelineConfig

        Raises:
            ConfigError: If YAML is invalid or values fail validation
        """
        try:
            with open(self.config_path) as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {self.config_path}: {e}") from e

        if not config or self.SECTION not in config:
            raise ConfigError(f"Configuration file must contain '{self.SECTION}' section")

        return parse_config(config[self.SECTION])


def parse_config(section: dict[str, Any] | None) -> PipelineConfig:
    """
    Validate a configuration mapping.

    Raises:
        ConfigError: If a value fails validation
    """
    try:
        return PipelineConfig.model_validate(section or {})
    except PydanticValidationError as e:
        raise ConfigError(f"Invalid pipeline configuration: {e}") from e


def load_config(config_path: str | Path | None = None) -> PipelineConfig:
    """Load configuration from a file, or defaults when no path is given."""
    if config_path is None:
        return PipelineConfig()
    return ConfigLoader(config_path).load()
