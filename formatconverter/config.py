"""Configuration management using pydantic-settings."""

from pathlib import Path
from typing import Any, Literal, Tuple, Type

import yaml
from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from formatconverter.conversion.config import ConversionConfig
from formatconverter.exceptions import ConfigurationError

_YAML_FIELDS = {
    "server": {
        "host": "converter_host",
        "port": "converter_port",
        "workers": "converter_workers",
    },
    "conversion": {
        "json_indent": "json_indent",
        "excel_sheet_name": "excel_sheet_name",
        "parquet_compression": "parquet_compression",
        "parquet_read_all_row_groups": "parquet_read_all_row_groups",
        "schema_policy": "schema_policy",
    },
    "limits": {
        "max_upload_size_mb": "max_upload_size_mb",
    },
    "logging": {
        "level": "log_level",
        "format": "log_format",
    },
}


def load_yaml_config(config_path: Path | None = None) -> dict[str, Any]:
    """
    Load configuration from YAML file.

    Priority:
    1. Explicitly provided config_path
    2. ~/.formatconverter/config.yaml (default location)
    3. Empty dict if no file exists

    Args:
        config_path: Optional path to config file

    Returns:
        Dictionary of configuration values (flattened from nested YAML)
    """
    if config_path is None:
        config_path = Path.home() / ".formatconverter" / "config.yaml"

    if not config_path.exists():
        return {}

    try:
        with open(config_path) as f:
            yaml_data = yaml.safe_load(f) or {}

        flattened = {}

        for section, fields in _YAML_FIELDS.items():
            values = yaml_data.get(section) or {}
            for yaml_key, field_name in fields.items():
                if yaml_key in values:
                    flattened[field_name] = values[yaml_key]

        return flattened

    except Exception as e:
        import warnings

        warnings.warn(f"Failed to load config from {config_path}: {e}")
        return {}


_config_path: Path | None = None


class YamlSettingsSource(PydanticBaseSettingsSource):
    """
    Custom settings source that loads configuration from YAML file.

    This allows YAML config to be loaded with proper priority in the settings chain.
    """

    def get_field_value(self, field: Any, field_name: str) -> Tuple[Any, str, bool]:
        """Not used since we override __call__."""
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Load configuration from YAML file."""
        return load_yaml_config(_config_path)


class Settings(BaseSettings):
    """
    FormatConverter configuration settings.

    Configuration priority (highest to lowest):
    1. Environment variables (e.g., CONVERTER_PORT=9000)
    2. YAML configuration file (~/.formatconverter/config.yaml)
    3. Default values defined in this class
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    converter_host: str = Field(default="0.0.0.0", description="Server bind address")
    converter_port: int = Field(
        default=8000, ge=1, le=65535, description="Server port"
    )
    converter_workers: int = Field(
        default=1, ge=1, description="Number of worker processes"
    )

    max_upload_size_mb: int = Field(
        default=1024, ge=1, description="Max file upload size"
    )

    json_indent: int = Field(
        default=2, ge=0, description="Indentation of JSON output"
    )
    excel_sheet_name: str = Field(
        default="Sheet1", description="Worksheet name for Excel output"
    )
    parquet_compression: Literal["snappy", "zstd", "gzip", "none"] = Field(
        default="snappy", description="Parquet compression codec"
    )
    parquet_read_all_row_groups: bool = Field(
        default=False,
        description="Read every Parquet row group instead of only the first",
    )
    schema_policy: Literal["pad", "strict"] = Field(
        default="pad",
        description="How records with differing key sets are handled",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    log_format: Literal["json", "text"] = Field(
        default="json", description="Log format"
    )

    @field_validator("excel_sheet_name")
    @classmethod
    def validate_sheet_name(cls, v: str) -> str:
        """Excel limits sheet titles to 31 characters without []:*?/\\."""
        if not v or len(v) > 31:
            raise ValueError("excel_sheet_name must be 1-31 characters")
        if any(ch in v for ch in "[]:*?/\\"):
            raise ValueError("excel_sheet_name contains a forbidden character")
        return v

    @property
    def max_file_size_bytes(self) -> int:
        """Get max file size in bytes."""
        return self.max_upload_size_mb * 1024 * 1024

    def conversion_config(self) -> ConversionConfig:
        """Build the conversion configuration from these settings.

        Raises:
            ConfigurationError: If the resulting configuration is invalid
        """
        try:
            return ConversionConfig(
                json_indent=self.json_indent,
                sheet_name=self.excel_sheet_name,
                parquet_compression=self.parquet_compression,
                read_all_row_groups=self.parquet_read_all_row_groups,
                schema_policy=self.schema_policy,
                max_file_size_bytes=self.max_file_size_bytes,
            )
        except ValueError as e:
            raise ConfigurationError(f"Invalid conversion settings: {e}") from e

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        """
        Customize settings sources priority.

        Priority order (highest to lowest):
        1. Explicit kwargs (init_settings) - for testing and programmatic config
        2. Environment variables
        3. YAML configuration file
        4. .env file
        5. Field defaults
        """
        return (
            init_settings,
            env_settings,
            YamlSettingsSource(settings_cls),
            dotenv_settings,
        )


_settings: Settings | None = None


def get_settings(config_path: Path | None = None, reload: bool = False) -> Settings:
    """
    Get global settings instance.

    Configuration loading order (highest to lowest priority):
    1. Environment variables (e.g., CONVERTER_PORT=9000)
    2. YAML configuration file (~/.formatconverter/config.yaml)
    3. .env file
    4. Default values defined in Settings class

    Args:
        config_path: Optional path to YAML config file
        reload: If True, force reload settings (useful for testing)

    Returns:
        Settings instance with merged configuration
    """
    global _settings, _config_path
    if _settings is None or reload:
        _config_path = config_path

        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings singleton (useful for testing)."""
    global _settings
    _settings = None
