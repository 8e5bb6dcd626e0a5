"""AMI post-process jobs package."""

from .base import BaseJob
from .propagate_permissions import PropagatePermissionsJob

__all__ = [
    "BaseJob",
    "PropagatePermissionsJob",
]
