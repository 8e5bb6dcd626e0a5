"""Simple data models for AWS AMI topology."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class BlockDeviceMapping:
    """A block device of an image.

    Devices without a snapshot id are ephemeral or otherwise not EBS backed.
    """
    device_name: str
    snapshot_id: Optional[str] = None

    @property
    def is_snapshot_backed(self) -> bool:
        return bool(self.snapshot_id)

    @classmethod
    def from_aws(cls, mapping: Dict[str, Any]) -> "BlockDeviceMapping":
        """Create from an entry of an image's BlockDeviceMappings."""
        ebs = mapping.get("Ebs") or {}
        return cls(
            device_name=mapping.get("DeviceName", ""),
            snapshot_id=ebs.get("SnapshotId"),
        )


@dataclass
class ImageInfo:
    """Simple AMI information model."""
    image_id: str
    devices: List[BlockDeviceMapping] = field(default_factory=list)

    @classmethod
    def from_aws_image(cls, image: Dict[str, Any]) -> "ImageInfo":
        """Create ImageInfo from AWS image data."""
        return cls(
            image_id=image["ImageId"],
            devices=[
                BlockDeviceMapping.from_aws(m)
                for m in image.get("BlockDeviceMappings", [])
            ],
        )
