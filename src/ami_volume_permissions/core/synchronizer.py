"""Copy an image's launch permissions to its EBS snapshots.

For every device backed by a snapshot the full launch permission set is
added to the snapshot's create volume permissions, one ModifySnapshotAttribute
call per snapshot, in device order. The first failure stops the run; snapshots
updated before it keep their new permissions.
"""

from typing import Iterable, List, Optional

from ami_volume_permissions.core.models import (
    BlockDeviceMapping,
    CreateVolumePermission,
    LaunchPermission,
    SyncReport,
)
from ami_volume_permissions.utils.exceptions import NoSnapshotDevicesError, SyncError
from ami_volume_permissions.utils.logger import setup_logger
from ami_volume_permissions.utils.reporter import ProgressReporter


def to_create_volume_permissions(
    permissions: Iterable[LaunchPermission],
) -> List[CreateVolumePermission]:
    """Translate launch permissions field for field, keeping order and duplicates."""
    return [CreateVolumePermission.from_launch_permission(p) for p in permissions]


class SnapshotPermissionSynchronizer:
    """Adds create volume permissions to the snapshots of an image.

    Args:
        ec2: ``EC2Manager`` or any object with ``add_create_volume_permissions``
        reporter: progress sink, defaults to a logging-only reporter
        dry_run: plan the updates without calling EC2
    """

    def __init__(
        self,
        ec2,
        reporter: Optional[ProgressReporter] = None,
        dry_run: bool = False,
    ):
        self.ec2 = ec2
        self.reporter = reporter or ProgressReporter()
        self.dry_run = dry_run
        self.logger = setup_logger(__name__, "synchronizer.log")

    def find_targets(self, devices: Iterable[BlockDeviceMapping]) -> List[str]:
        """Snapshot ids of the snapshot backed devices, in device order."""
        targets = []
        for device in devices:
            self.reporter.say(f"Checking device {device.device_name}")
            if device.is_snapshot_backed:
                targets.append(device.snapshot_id)
        return targets

    def synchronize(
        self,
        image_id: Optional[str],
        devices: Iterable[BlockDeviceMapping],
        permissions: Iterable[LaunchPermission],
    ) -> SyncReport:
        """Add the launch permissions to every snapshot of the image.

        Raises:
            NoSnapshotDevicesError: if no device is backed by a snapshot
            SyncError: on the first failed update, with the partial report attached
        """
        targets = self.find_targets(devices)
        if not targets:
            self.logger.error(f"No snapshot backed devices found for {image_id}")
            raise NoSnapshotDevicesError(image_id)

        snapshot_permissions = to_create_volume_permissions(permissions)
        report = SyncReport(
            image_id=image_id,
            target_snapshot_ids=targets,
            permissions=snapshot_permissions,
            dry_run=self.dry_run,
        )

        for index, snapshot_id in enumerate(targets):
            self.reporter.say(f"Snapshot ID: {snapshot_id}")
            self.reporter.say(
                f"Snapshot Permissions: [{', '.join(str(p) for p in snapshot_permissions)}]"
            )

            if self.dry_run:
                report.planned_snapshot_ids.append(snapshot_id)
                continue

            try:
                self.ec2.add_create_volume_permissions(snapshot_id, snapshot_permissions)
            except Exception as e:
                report.failed_snapshot_id = snapshot_id
                report.failed_index = index
                report.cause = e
                self.logger.error(
                    f"Failed to update {snapshot_id} after {len(report.applied_snapshot_ids)} "
                    f"snapshot(s) were updated: {e}"
                )
                raise SyncError(snapshot_id, e, report) from e

            report.applied_snapshot_ids.append(snapshot_id)

        self.logger.info(
            f"Synchronized {len(report.applied_snapshot_ids)} snapshot(s) of {image_id}"
        )
        return report


def synchronize(
    ec2,
    devices: Iterable[BlockDeviceMapping],
    permissions: Iterable[LaunchPermission],
    image_id: Optional[str] = None,
    reporter: Optional[ProgressReporter] = None,
    dry_run: bool = False,
) -> SyncReport:
    """Convenience wrapper around ``SnapshotPermissionSynchronizer``."""
    synchronizer = SnapshotPermissionSynchronizer(ec2, reporter=reporter, dry_run=dry_run)
    return synchronizer.synchronize(image_id, devices, permissions)
