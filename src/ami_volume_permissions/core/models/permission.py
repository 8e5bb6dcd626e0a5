"""Launch and create volume permission models.

Both grants name a principal by account id or by group. Neither model
enforces that exactly one of the two is set; entries are copied verbatim.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class LaunchPermission:
    """Grant allowing a principal to launch an image."""
    user_id: Optional[str] = None
    group: Optional[str] = None

    @classmethod
    def from_aws(cls, permission: Dict[str, Any]) -> "LaunchPermission":
        return cls(user_id=permission.get("UserId"), group=permission.get("Group"))

    def to_aws(self) -> Dict[str, str]:
        return _principal_to_aws(self.user_id, self.group)

    def __str__(self) -> str:
        return _principal_str(self.user_id, self.group)


@dataclass(frozen=True)
class CreateVolumePermission:
    """Grant allowing a principal to create a volume from a snapshot."""
    user_id: Optional[str] = None
    group: Optional[str] = None

    @classmethod
    def from_launch_permission(
        cls, permission: LaunchPermission
    ) -> "CreateVolumePermission":
        return cls(user_id=permission.user_id, group=permission.group)

    def to_aws(self) -> Dict[str, str]:
        return _principal_to_aws(self.user_id, self.group)

    def __str__(self) -> str:
        return _principal_str(self.user_id, self.group)


def _principal_to_aws(user_id: Optional[str], group: Optional[str]) -> Dict[str, str]:
    # boto3 rejects None values, so unset fields are left out
    entry = {}
    if group is not None:
        entry["Group"] = group
    if user_id is not None:
        entry["UserId"] = user_id
    return entry


def _principal_str(user_id: Optional[str], group: Optional[str]) -> str:
    parts = []
    if group is not None:
        parts.append(f"Group: {group}")
    if user_id is not None:
        parts.append(f"UserId: {user_id}")
    return "{" + ", ".join(parts) + "}"
