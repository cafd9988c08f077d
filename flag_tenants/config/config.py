"""
Configuration models for the feature-flag tenant editor.

Uses Pydantic for validation and type safety. Values come from config.yaml,
with FLAG_TENANTS_* environment variables taking precedence
(FLAG_TENANTS_SERVICE__BASE_URL overrides service.base_url).
"""
import os
import re
from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from flag_tenants import constants

ENV_PREFIX = "FLAG_TENANTS_"


class ServiceConfig(BaseSettings):
    """Remote web application endpoints and session conventions."""
    model_config = SettingsConfigDict(extra="ignore")

    public_base_url: str = constants.DEFAULT_PUBLIC_BASE_URL
    base_url: str = constants.DEFAULT_BASE_URL

    login_endpoint: str = constants.LOGIN_ENDPOINT
    feature_flag_endpoint: str = constants.FEATURE_FLAG_ENDPOINT
    logout_endpoint: str = constants.LOGOUT_ENDPOINT

    session_cookie_name: str = constants.SESSION_COOKIE_NAME
    csrf_token_header: str = constants.CSRF_TOKEN_HEADER

    request_timeout_seconds: float = Field(default=constants.DEFAULT_API_TIMEOUT, gt=0, le=300)

    @field_validator("public_base_url", "base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"base URL must be http(s): {v}")
        return v.rstrip("/")

    @field_validator("login_endpoint", "feature_flag_endpoint", "logout_endpoint")
    @classmethod
    def leading_slash(cls, v: str) -> str:
        return v if v.startswith("/") else f"/{v}"

    def url(self, endpoint: str, *, public: bool = False) -> str:
        base = self.public_base_url if public else self.base_url
        return f"{base}{endpoint}"


class MonitoringConfig(BaseSettings):
    """Logging configuration."""
    model_config = SettingsConfigDict(extra="ignore")

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "text"] = "text"
    log_file: Optional[str] = None


class Config(BaseSettings):
    """Main configuration class."""
    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_nested_delimiter="__",
        extra="ignore",
    )

    service: ServiceConfig = Field(default_factory=ServiceConfig)
    monitoring: MonitoringConfig = Field(default_factory=MonitoringConfig)

    # Compute and report the change but never PUT it
    dry_run: bool = False

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> "Config":
        """Load configuration from YAML file."""
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {yaml_path}")

        with open(yaml_path, "r") as f:
            raw_content = f.read()

        # Regex to find ${VAR} or $VAR
        pattern = re.compile(r'\$\{([^}]+)\}|\$([a-zA-Z_][a-zA-Z0-9_]*)')

        def replace_match(match):
            var_name = match.group(1) or match.group(2)
            return os.environ.get(var_name, match.group(0))  # Return original if not found

        expanded_content = pattern.sub(replace_match, raw_content)
        config_dict = yaml.safe_load(expanded_content) or {}

        # Init kwargs beat env vars in pydantic-settings; drop YAML values
        # that an env var overrides so the environment wins.
        for section, values in list(config_dict.items()):
            if isinstance(values, dict):
                for key in list(values):
                    if f"{ENV_PREFIX}{section}__{key}".upper() in os.environ:
                        del values[key]
            elif f"{ENV_PREFIX}{section}".upper() in os.environ:
                del config_dict[section]

        return cls(**config_dict)


def default_config_path() -> Path:
    return Path(__file__).parent / "config.yaml"


def load_config(config_path: str | Path | None = None) -> Config:
    """
    Load and validate configuration.

    Args:
        config_path: Path to config.yaml file. If None, uses the packaged config.yaml

    Returns:
        Validated Config object

    Raises:
        FileNotFoundError: If config file not found
        pydantic.ValidationError: If configuration validation fails
    """
    if config_path is None:
        config_path = default_config_path()

    return Config.from_yaml(config_path)
