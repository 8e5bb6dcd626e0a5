"""Result models for snapshot permission synchronization."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .permission import CreateVolumePermission


@dataclass
class SyncReport:
    """Outcome of synchronizing one image's snapshots.

    ``applied_snapshot_ids`` stay applied when a later snapshot fails; the
    snapshots after the failed one are listed in ``pending_snapshot_ids``.
    """

    image_id: Optional[str] = None
    target_snapshot_ids: List[str] = field(default_factory=list)
    applied_snapshot_ids: List[str] = field(default_factory=list)
    planned_snapshot_ids: List[str] = field(default_factory=list)
    failed_snapshot_id: Optional[str] = None
    # Position in target_snapshot_ids; a snapshot id may back several devices
    failed_index: Optional[int] = None
    cause: Optional[BaseException] = None
    permissions: List[CreateVolumePermission] = field(default_factory=list)
    dry_run: bool = False

    @property
    def succeeded(self) -> bool:
        return self.failed_snapshot_id is None

    @property
    def pending_snapshot_ids(self) -> List[str]:
        if self.failed_index is None:
            return []
        return self.target_snapshot_ids[self.failed_index + 1:]

    def to_dict(self) -> Dict[str, Any]:
        """Convert report to dictionary for serialization."""
        return {
            "image_id": self.image_id,
            "dry_run": self.dry_run,
            "target_snapshot_ids": list(self.target_snapshot_ids),
            "applied_snapshot_ids": list(self.applied_snapshot_ids),
            "planned_snapshot_ids": list(self.planned_snapshot_ids),
            "failed_snapshot_id": self.failed_snapshot_id,
            "failed_index": self.failed_index,
            "pending_snapshot_ids": self.pending_snapshot_ids,
            "cause": str(self.cause) if self.cause is not None else None,
            "permissions": [p.to_aws() for p in self.permissions],
        }


@dataclass
class PostProcessResult:
    """Terminal result of a post-process run. The artifact is unchanged."""

    artifact_id: str
    image_id: str
    processed: bool
    report: SyncReport

    def to_dict(self) -> Dict[str, Any]:
        return {
            "artifact_id": self.artifact_id,
            "image_id": self.image_id,
            "processed": self.processed,
            "report": self.report.to_dict(),
        }
