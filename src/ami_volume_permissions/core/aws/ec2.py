"""Simple EC2 Manager for the image and snapshot permission calls.

Only the three remote operations used by a post-process run are exposed.
Errors from boto3 propagate unchanged; callers wrap them with the image or
snapshot id they belong to.
"""

from typing import Any, Dict, List, Optional

import boto3

from ami_volume_permissions.core.constants import (
    DEFAULT_AWS_REGION,
    EC2_SERVICE_NAME,
    LAUNCH_PERMISSION_ATTRIBUTE,
)
from ami_volume_permissions.core.models import CreateVolumePermission
from ami_volume_permissions.utils.logger import setup_logger


class EC2Manager:
    """Simple AWS EC2 resource manager."""

    def __init__(
        self,
        session: Optional[boto3.Session] = None,
        region: Optional[str] = None,
        client: Any = None,
    ):
        """Initialize EC2Manager from a session, or around an existing client."""
        if client is None and session is None:
            raise ValueError("EC2Manager needs a boto3 session or an EC2 client")

        self.session = session
        self.region = region or getattr(session, "region_name", None) or DEFAULT_AWS_REGION
        self.ec2_client = client or session.client(EC2_SERVICE_NAME, region_name=self.region)
        self.logger = setup_logger(__name__, "ec2_manager.log")

    def describe_launch_permissions(self, image_id: str) -> List[Dict[str, Any]]:
        """Describe the launch permission attribute of an image."""
        response = self.ec2_client.describe_image_attribute(
            Attribute=LAUNCH_PERMISSION_ATTRIBUTE,
            ImageId=image_id,
        )
        return response.get("LaunchPermissions", [])

    def describe_images(self, image_ids: List[str]) -> List[Dict[str, Any]]:
        """Describe AMI images, including their block device mappings.

        DescribeImageAttribute for blockDeviceMapping fails with AuthFailure
        for images we can read launch permissions of, so the topology comes
        from DescribeImages instead.
        """
        response = self.ec2_client.describe_images(ImageIds=image_ids)
        return response.get("Images", [])

    def add_create_volume_permissions(
        self, snapshot_id: str, permissions: List[CreateVolumePermission]
    ) -> None:
        """Add create volume permissions to a snapshot. Existing grants are kept."""
        self.ec2_client.modify_snapshot_attribute(
            SnapshotId=snapshot_id,
            CreateVolumePermission={"Add": [p.to_aws() for p in permissions]},
        )
        self.logger.debug(
            f"Added {len(permissions)} create volume permission(s) to {snapshot_id}"
        )

