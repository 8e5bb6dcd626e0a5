"""Base job class for AMI post-processing."""

from abc import ABC, abstractmethod
from typing import Any, Optional
import uuid

import boto3

from ami_volume_permissions.utils.config import AccessConfig, ConfigManager
from ami_volume_permissions.utils.logger import setup_logger
from ami_volume_permissions.utils.session import SessionManager


class BaseJob(ABC):
    """Base class for all post-process jobs."""

    # Class-level configuration cache
    _config_manager: Optional[ConfigManager] = None

    def __init__(
        self,
        config_manager: Optional[ConfigManager] = None,
        job_name: Optional[str] = None,
        access_config: Optional[AccessConfig] = None,
    ):
        """Initialize the job with configuration.

        ``access_config`` overrides the access settings loaded from the config
        manager.
        """
        if config_manager is not None:
            self.config_manager = config_manager
        else:
            self.config_manager = self._get_or_create_config_manager()

        self.job_name = job_name or self.__class__.__name__.lower().replace("job", "")
        self.correlation_id = str(uuid.uuid4())[:8]  # Short correlation ID for tracking
        self.access_config = access_config or self.config_manager.get_access_config()

        self.logger = setup_logger(
            name=self.__class__.__module__,
            log_file=f"{self.job_name}.log",
            level=self.config_manager.get_logging_level(),
        )

    @classmethod
    def _get_or_create_config_manager(cls) -> ConfigManager:
        """Get or create a cached ConfigManager instance."""
        if cls._config_manager is None:
            cls._config_manager = ConfigManager()
        return cls._config_manager

    def create_aws_session(self, region: Optional[str] = None) -> boto3.Session:
        """Create an AWS session from the access configuration.

        ``region`` is used only when no region is configured.
        """
        access_config = self.access_config
        if not access_config.region and region:
            access_config = access_config.merged(region=region)

        self.logger.info(
            f"[{self.correlation_id}] Creating AWS session for {self.job_name} "
            f"in {access_config.region}"
        )
        self.logger.debug(f"[{self.correlation_id}] Access config: {access_config!r}")

        return SessionManager.get_session(access_config)

    @abstractmethod
    def execute(self, *args, **kwargs) -> Any:
        """Execute the job with given parameters."""
        pass
