#!/usr/bin/env python3
"""
utils/session.py

Session management utilities for AWS interactions.

Turns an ``AccessConfig`` into an authenticated boto3 Session. Anything that
prevents a usable session is raised as ``ConfigurationError``.
"""

from typing import List, Optional

import boto3
from botocore.exceptions import BotoCoreError, ProfileNotFound

from ami_volume_permissions.core.constants import EC2_SERVICE_NAME
from .config import AccessConfig
from .exceptions import ConfigurationError
from .logger import setup_logger

logger = setup_logger(__name__, "session.log")


def available_regions(partition: str = "aws") -> List[str]:
    """Regions boto3 knows EC2 to be available in for the partition."""
    return boto3.session.Session().get_available_regions(
        EC2_SERVICE_NAME, partition_name=partition
    )


def validate_region(region: Optional[str]) -> str:
    """Check the region against boto3's endpoint data."""
    if not region:
        raise ConfigurationError(
            "No AWS region configured. Set aws.region, AWS_REGION or pass --region."
        )

    for partition in ("aws", "aws-cn", "aws-us-gov"):
        if region in available_regions(partition):
            return region

    raise ConfigurationError(
        f"Invalid AWS region: {region}. Use skip_region_validation for new regions."
    )


class SessionManager:
    """Manages AWS sessions for credential handling."""

    @classmethod
    def get_session(cls, access_config: AccessConfig) -> boto3.Session:
        """Create a boto3 Session for the access configuration.

        Static keys win over a named profile, which wins over the default
        credential chain.
        """
        if bool(access_config.access_key) != bool(access_config.secret_key):
            raise ConfigurationError(
                "Both access_key and secret_key must be set when using static credentials."
            )

        try:
            region = access_config.region
            if access_config.skip_region_validation:
                if not region:
                    raise ConfigurationError("No AWS region configured.")
            else:
                region = validate_region(region)

            if access_config.access_key:
                logger.debug(f"Creating session from static credentials in {region}")
                return boto3.Session(
                    aws_access_key_id=access_config.access_key,
                    aws_secret_access_key=access_config.secret_key,
                    aws_session_token=access_config.token or None,
                    region_name=region,
                )

            if access_config.profile:
                logger.debug(
                    f"Creating session from profile {access_config.profile} in {region}"
                )
                session = boto3.Session(
                    profile_name=access_config.profile, region_name=region
                )
                if access_config.profile not in session.available_profiles:
                    raise ProfileNotFound(profile=access_config.profile)
                return session

            logger.debug(f"Creating session from default credential chain in {region}")
            return boto3.Session(region_name=region)

        except (ProfileNotFound, BotoCoreError) as e:
            raise ConfigurationError(f"could not create AWS config: {e}") from e
