"""Image attribute lookups.

Launch permissions and block device topology are read with two separate
calls, DescribeImageAttribute and DescribeImages. Either failing aborts the
run with a FetchError.
"""

from typing import List

from ami_volume_permissions.core.models import (
    BlockDeviceMapping,
    ImageInfo,
    LaunchPermission,
)
from ami_volume_permissions.utils.exceptions import FetchError
from ami_volume_permissions.utils.logger import setup_logger


class ImageAttributeFetcher:
    """Reads launch permissions and devices of an image.

    ``ec2`` is an ``EC2Manager`` or anything exposing the same
    ``describe_launch_permissions`` and ``describe_images`` methods.
    """

    def __init__(self, ec2):
        self.ec2 = ec2
        self.logger = setup_logger(__name__, "fetcher.log")

    def fetch_launch_permissions(self, image_id: str) -> List[LaunchPermission]:
        try:
            raw = self.ec2.describe_launch_permissions(image_id)
        except Exception as e:
            self.logger.error(f"Error describing launch permissions of {image_id}: {e}")
            raise FetchError(image_id, e, what="launch permission attribute") from e

        permissions = [LaunchPermission.from_aws(p) for p in raw]
        self.logger.debug(f"{image_id} has {len(permissions)} launch permission(s)")
        return permissions

    def fetch_images(self, image_id: str) -> List[ImageInfo]:
        try:
            raw = self.ec2.describe_images([image_id])
        except Exception as e:
            self.logger.error(f"Error describing image {image_id}: {e}")
            raise FetchError(image_id, e, what="block device mapping attribute") from e

        return [ImageInfo.from_aws_image(image) for image in raw]

    def fetch_image_devices(self, image_id: str) -> List[BlockDeviceMapping]:
        """Devices of every returned image, in the order EC2 returned them."""
        devices = []
        for image in self.fetch_images(image_id):
            devices.extend(image.devices)

        if not devices:
            self.logger.warning(f"No block devices returned for {image_id}")
        return devices
