#!/usr/bin/env python3
"""
utils/config.py

Simple configuration management utilities.
Provides centralized configuration loading and the AWS access configuration
used to build sessions.
"""

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ami_volume_permissions.core.constants import (
    CONFIG_DIR_ENV_VAR,
    DEFAULT_CONFIG_DIR,
)
from ami_volume_permissions.utils.logger import setup_logger

logger = setup_logger(__name__, "config.log")


@dataclass
class AccessConfig:
    """AWS access configuration.

    Supports access_key, secret_key, token, profile, region and
    skip_region_validation. Empty values fall through to the default boto3
    credential chain.
    """

    region: Optional[str] = None
    profile: Optional[str] = None
    access_key: Optional[str] = None
    secret_key: Optional[str] = None
    token: Optional[str] = None
    skip_region_validation: bool = False

    def merged(self, **overrides: Any) -> "AccessConfig":
        """Return a copy with every non-empty override applied."""
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        for key, value in overrides.items():
            if key not in values:
                raise ValueError(f"Unknown access config option: {key}")
            if value is not None and value != "":
                values[key] = value
        return AccessConfig(**values)

    def __repr__(self) -> str:
        # Keep credentials out of logs
        return (
            f"AccessConfig(region={self.region!r}, profile={self.profile!r}, "
            f"access_key={'***' if self.access_key else None}, "
            f"secret_key={'***' if self.secret_key else None}, "
            f"token={'***' if self.token else None}, "
            f"skip_region_validation={self.skip_region_validation})"
        )


class ConfigManager:
    """
    Simple configuration manager.

    Features:
    - YAML configuration loading
    - Environment variable override support
    """

    def __init__(self, config_dir: Optional[Path] = None):
        """
        Initialize ConfigManager.

        Args:
            config_dir: Custom config directory path (defaults to $AMI_PERMS_CONFIG_DIR
                or ./configs)
        """
        if config_dir is None:
            config_dir = Path(os.environ.get(CONFIG_DIR_ENV_VAR, DEFAULT_CONFIG_DIR))
        self.config_dir = Path(config_dir)

        # Try both .yml and .yaml extensions
        yml_file = self.config_dir / "settings.yml"
        yaml_file = self.config_dir / "settings.yaml"

        if yml_file.exists():
            self.settings_file = yml_file
        elif yaml_file.exists():
            self.settings_file = yaml_file
        else:
            self.settings_file = yaml_file  # Default to .yaml for error messages

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """
        Load a YAML file safely.
        """
        if not file_path.exists():
            logger.debug(f"Config file not found: {file_path}")
            return {}

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                content = yaml.safe_load(f)
                return content or {}
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Error loading {file_path}: {e}")
            return {}

    def load_settings(self) -> Dict[str, Any]:
        """
        Load application settings.
        """
        return self._load_yaml_file(self.settings_file)

    def get_value(
        self, key_path: str, default: Any = None, env_var: Optional[str] = None
    ) -> Any:
        """
        Get configuration value with dot notation support and environment variable override.
        """
        # Check environment variable first
        if env_var and env_var in os.environ:
            return os.environ[env_var]

        keys = key_path.split(".")
        current = self.config

        try:
            for key in keys:
                current = current[key]
            return current
        except (KeyError, TypeError):
            return default

    def get_aws_region(self) -> Optional[str]:
        """Get AWS region with environment variable override support."""
        region = self.get_value("aws.region", None, env_var="AWS_REGION")
        return region or os.environ.get("AWS_DEFAULT_REGION")

    def get_access_config(self) -> AccessConfig:
        """Build the AWS access configuration from settings and environment."""
        skip = self.get_value("aws.skip_region_validation", False)
        if isinstance(skip, str):
            skip = skip.strip().lower() in ("1", "true", "yes", "on")

        return AccessConfig(
            region=self.get_aws_region(),
            profile=self.get_value("aws.profile", None, env_var="AWS_PROFILE"),
            access_key=self.get_value("aws.access_key", None, env_var="AWS_ACCESS_KEY_ID"),
            secret_key=self.get_value(
                "aws.secret_key", None, env_var="AWS_SECRET_ACCESS_KEY"
            ),
            token=self.get_value("aws.token", None, env_var="AWS_SESSION_TOKEN"),
            skip_region_validation=bool(skip),
        )

    def get_logging_level(self) -> str:
        """Get logging level."""
        return self.get_value("logging.level", "INFO", env_var="LOG_LEVEL")

    @property
    def config(self) -> Dict[str, Any]:
        """Get the full configuration as a cached property."""
        if not hasattr(self, "_cached_config"):
            self._cached_config = self.load_settings()
        return self._cached_config

    def reload_config(self) -> None:
        """Force reload of configuration from file."""
        if hasattr(self, "_cached_config"):
            delattr(self, "_cached_config")
