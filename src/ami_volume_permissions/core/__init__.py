"""Core AMI volume permissions module."""

from .aws import EC2Manager
from .models import (
    BlockDeviceMapping,
    ImageInfo,
    LaunchPermission,
    CreateVolumePermission,
    SyncReport,
    PostProcessResult,
)
from .parser import parse_image_id, parse_region
from .fetcher import ImageAttributeFetcher
from .synchronizer import (
    SnapshotPermissionSynchronizer,
    synchronize,
    to_create_volume_permissions,
)

__all__ = [
    # AWS Managers
    "EC2Manager",
    # Models
    "BlockDeviceMapping",
    "ImageInfo",
    "LaunchPermission",
    "CreateVolumePermission",
    "SyncReport",
    "PostProcessResult",
    # Parsing
    "parse_image_id",
    "parse_region",
    # Fetch and synchronize
    "ImageAttributeFetcher",
    "SnapshotPermissionSynchronizer",
    "synchronize",
    "to_create_volume_permissions",
]
