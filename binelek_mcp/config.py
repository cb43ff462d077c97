"""
Configuration management for the Binelek MCP server.

Settings come from three layers: built-in defaults, an optional YAML file
with environment variable substitution, and BINELEK_* environment variables
(including a local .env file). Environment variables win.
"""

import os
import re
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from binelek_mcp import __version__
from binelek_mcp.exceptions import ConfigurationError

DEFAULT_GATEWAY_URL = "http://localhost:8092"
DEFAULT_TENANT_ID = "core"
DEFAULT_TIMEOUT_MS = 30000
DEFAULT_CONFIG_FILE = "binelek.yaml"


class GatewayConfig(BaseModel):
    """Connection settings for the Binelek API gateway.

    Frozen once built: every request sent by one client acts as the same
    tenant and principal.
    """

    model_config = ConfigDict(frozen=True)

    base_url: str
    tenant_id: str
    auth_token: Optional[str] = None
    timeout_ms: int = Field(default=DEFAULT_TIMEOUT_MS, gt=0)

    @field_validator("base_url", "tenant_id")
    @classmethod
    def validate_required(cls, v: str) -> str:
        """Reject blank gateway URL or tenant id."""
        if not v or not v.strip():
            raise ValueError("must not be empty")
        return v.strip()

    @field_validator("auth_token")
    @classmethod
    def validate_token(cls, v: Optional[str]) -> Optional[str]:
        """Treat an empty token as no token."""
        if v is None or not v.strip():
            return None
        return v.strip()

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    format: str = "structured"

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level name."""
        allowed_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v = v.upper()
        if v not in allowed_levels:
            raise ValueError(f"Level must be one of {allowed_levels}")
        return v

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        """Validate log output format."""
        allowed_formats = {"structured", "json"}
        if v not in allowed_formats:
            raise ValueError(f"Format must be one of {allowed_formats}")
        return v


class ServerConfig(BaseModel):
    """MCP server identity reported during initialization."""

    name: str = "binelek-mcp-server"
    version: str = __version__


class Config(BaseModel):
    """Main configuration model."""

    gateway: GatewayConfig = Field(
        default_factory=lambda: GatewayConfig(
            base_url=DEFAULT_GATEWAY_URL, tenant_id=DEFAULT_TENANT_ID
        )
    )
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)


class EnvironmentSettings(BaseSettings):
    """Settings loaded from BINELEK_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="BINELEK_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    gateway_url: str = DEFAULT_GATEWAY_URL
    tenant_id: str = DEFAULT_TENANT_ID
    jwt_token: Optional[str] = None
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    log_level: str = "INFO"
    log_format: str = "structured"
    config_file: Optional[str] = None


# EnvironmentSettings field -> (section, key) in Config
_ENV_FIELD_MAP = {
    "gateway_url": ("gateway", "base_url"),
    "tenant_id": ("gateway", "tenant_id"),
    "jwt_token": ("gateway", "auth_token"),
    "timeout_ms": ("gateway", "timeout_ms"),
    "log_level": ("logging", "level"),
    "log_format": ("logging", "format"),
}


def substitute_variables(
    data: Union[str, Dict[str, Any], list], variables: Dict[str, Any]
) -> Union[str, Dict[str, Any], list]:
    """
    Substitute {VAR} templates in configuration data.

    Unknown variables are left untouched.
    """
    if isinstance(data, str):
        pattern = r"\{([A-Za-z_][A-Za-z0-9_]*)\}"

        def replace_var(match: re.Match[str]) -> str:
            return str(variables.get(match.group(1), match.group(0)))

        return re.sub(pattern, replace_var, data)

    elif isinstance(data, dict):
        return {k: substitute_variables(v, variables) for k, v in data.items()}

    elif isinstance(data, list):
        return [substitute_variables(item, variables) for item in data]

    else:
        return data


def _read_yaml(config_path: Path) -> Dict[str, Any]:
    try:
        with config_path.open("r", encoding="utf-8") as f:
            raw_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Failed to parse YAML configuration: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Failed to read configuration file {config_path}: {e}") from e

    if raw_config is None:
        return {}
    if not isinstance(raw_config, dict):
        raise ConfigurationError(f"Configuration file {config_path} must contain a mapping")
    return raw_config


def load_config(config_path: Optional[Union[str, Path]] = None) -> Config:
    """
    Load configuration from defaults, an optional YAML file and the environment.

    Args:
        config_path: Path to a YAML configuration file. If None, BINELEK_CONFIG_FILE
            is used, then binelek.yaml in the working directory if it exists.

    Returns:
        Validated configuration object.

    Raises:
        ConfigurationError: If configuration is invalid or cannot be loaded.
    """
    load_dotenv()

    try:
        env_settings = EnvironmentSettings()
    except ValidationError as e:
        raise ConfigurationError(f"Invalid BINELEK_* environment settings: {e}") from e

    raw_config: Dict[str, Any] = {}

    if config_path is None and env_settings.config_file:
        config_path = env_settings.config_file

    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.exists():
            raise ConfigurationError(f"Configuration file not found: {config_path}")
        raw_config = _read_yaml(config_path)
    elif Path(DEFAULT_CONFIG_FILE).exists():
        raw_config = _read_yaml(Path(DEFAULT_CONFIG_FILE))

    raw_config = substitute_variables(raw_config, dict(os.environ))

    # Defaults come from EnvironmentSettings; YAML overrides them and
    # explicitly set environment variables override YAML.
    explicit = env_settings.model_fields_set
    for field_name, (section, key) in _ENV_FIELD_MAP.items():
        section_data = raw_config.setdefault(section, {})
        if not isinstance(section_data, dict):
            raise ConfigurationError(f"Configuration section '{section}' must be a mapping")
        if field_name in explicit or key not in section_data:
            section_data[key] = getattr(env_settings, field_name)

    try:
        return Config(**raw_config)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
