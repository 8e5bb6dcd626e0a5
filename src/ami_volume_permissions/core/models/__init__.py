"""Simple data models for AMI and snapshot permissions."""

# AMI models
from .ami import (
    BlockDeviceMapping,
    ImageInfo,
)

# Permission models
from .permission import (
    LaunchPermission,
    CreateVolumePermission,
)

# Result models
from .report import (
    SyncReport,
    PostProcessResult,
)

__all__ = [
    # AMI models
    "BlockDeviceMapping",
    "ImageInfo",
    # Permission models
    "LaunchPermission",
    "CreateVolumePermission",
    # Result models
    "SyncReport",
    "PostProcessResult",
]
