#!/usr/bin/env python3
"""
Propagate AMI Permissions Job

Post-process step for a freshly built AMI: the users and groups allowed to
launch the image are granted create volume permission on every EBS snapshot
backing it, so they can also create volumes from those snapshots.

Artifact ids look like ``<region>:<ami_id>``, for example
``ap-southeast-2:ami-4f8fae2c``.
"""

from typing import Optional

from .base import BaseJob
from ami_volume_permissions.core.aws import EC2Manager
from ami_volume_permissions.core.fetcher import ImageAttributeFetcher
from ami_volume_permissions.core.models import PostProcessResult
from ami_volume_permissions.core.parser import parse_image_id, parse_region
from ami_volume_permissions.core.synchronizer import SnapshotPermissionSynchronizer
from ami_volume_permissions.utils.config import AccessConfig, ConfigManager
from ami_volume_permissions.utils.exceptions import AmiPermissionsError
from ami_volume_permissions.utils.reporter import ProgressReporter


class PropagatePermissionsJob(BaseJob):
    """Job to copy AMI launch permissions to the AMI's snapshots"""

    def __init__(
        self,
        config_manager: Optional[ConfigManager] = None,
        access_config: Optional[AccessConfig] = None,
        reporter: Optional[ProgressReporter] = None,
        ec2_manager: Optional[EC2Manager] = None,
    ):
        super().__init__(
            config_manager=config_manager,
            job_name="propagate_permissions",
            access_config=access_config,
        )
        self.reporter = reporter or ProgressReporter(name=__name__)
        self.ec2_manager = ec2_manager

    def _get_ec2_manager(self, artifact_id: str) -> EC2Manager:
        if self.ec2_manager is None:
            session = self.create_aws_session(region=parse_region(artifact_id))
            self.ec2_manager = EC2Manager(session)
        return self.ec2_manager

    def execute(self, artifact_id: str, dry_run: bool = False) -> PostProcessResult:
        """Copy the launch permissions of the artifact's AMI to its snapshots.

        Raises:
            AmiPermissionsError: the first failure of any stage, unchanged
        """
        say = self.reporter.say
        say(artifact_id)

        try:
            image_id = parse_image_id(artifact_id)
            say(f"AMI ID: {image_id}")

            ec2 = self._get_ec2_manager(artifact_id)
            fetcher = ImageAttributeFetcher(ec2)

            permissions = fetcher.fetch_launch_permissions(image_id)
            say(f"AMI permissions: [{', '.join(str(p) for p in permissions)}]")

            devices = fetcher.fetch_image_devices(image_id)

            synchronizer = SnapshotPermissionSynchronizer(
                ec2, reporter=self.reporter, dry_run=dry_run
            )
            report = synchronizer.synchronize(image_id, devices, permissions)

        except AmiPermissionsError as e:
            self.logger.error(f"[{self.correlation_id}] {e.stage} failed: {e}")
            raise

        if dry_run:
            self.logger.info(
                f"[{self.correlation_id}] DRY RUN: would update "
                f"{len(report.planned_snapshot_ids)} snapshot(s) of {image_id}"
            )
        else:
            self.logger.info(
                f"[{self.correlation_id}] Updated {len(report.applied_snapshot_ids)} "
                f"snapshot(s) of {image_id}"
            )

        return PostProcessResult(
            artifact_id=artifact_id,
            image_id=image_id,
            processed=not dry_run,
            report=report,
        )
