from unittest.mock import call

import pytest

from ami_volume_permissions.core.models import BlockDeviceMapping, LaunchPermission
from ami_volume_permissions.core.synchronizer import (
    SnapshotPermissionSynchronizer,
    synchronize,
)
from ami_volume_permissions.utils.exceptions import NoSnapshotDevicesError, SyncError

from .aws_fixtures import client_error

PERMISSIONS = [LaunchPermission(group="all"), LaunchPermission(user_id="123456789012")]
EXPECTED_ADD = {"Add": [{"Group": "all"}, {"UserId": "123456789012"}]}


def devices(*snapshot_ids):
    return [
        BlockDeviceMapping(f"/dev/sd{chr(ord('a') + i)}", snapshot_id)
        for i, snapshot_id in enumerate(snapshot_ids)
    ]


def test_single_snapshot_example(ec2_manager, mock_ec2_client, reporter):
    mapping = [
        BlockDeviceMapping("/dev/sda1", "snap-111"),
        BlockDeviceMapping("/dev/sdb", None),
    ]

    report = synchronize(
        ec2_manager, mapping, [LaunchPermission(group="all")], "ami-4f8fae2c", reporter
    )

    mock_ec2_client.modify_snapshot_attribute.assert_called_once_with(
        SnapshotId="snap-111",
        CreateVolumePermission={"Add": [{"Group": "all"}]},
    )
    assert report.succeeded
    assert report.applied_snapshot_ids == ["snap-111"]
    assert reporter.lines == [
        "Checking device /dev/sda1",
        "Checking device /dev/sdb",
        "Snapshot ID: snap-111",
        "Snapshot Permissions: [{Group: all}]",
    ]


def test_one_update_per_snapshot_in_device_order(ec2_manager, mock_ec2_client):
    report = SnapshotPermissionSynchronizer(ec2_manager).synchronize(
        "ami-1", devices("snap-3", None, "snap-1", "snap-2"), PERMISSIONS
    )

    assert mock_ec2_client.modify_snapshot_attribute.call_args_list == [
        call(SnapshotId="snap-3", CreateVolumePermission=EXPECTED_ADD),
        call(SnapshotId="snap-1", CreateVolumePermission=EXPECTED_ADD),
        call(SnapshotId="snap-2", CreateVolumePermission=EXPECTED_ADD),
    ]
    assert report.applied_snapshot_ids == ["snap-3", "snap-1", "snap-2"]


def test_permissions_are_copied_without_dedupe(ec2_manager, mock_ec2_client):
    duplicated = [LaunchPermission(group="all"), LaunchPermission(group="all"), LaunchPermission()]

    synchronize(ec2_manager, devices("snap-1"), duplicated)

    mock_ec2_client.modify_snapshot_attribute.assert_called_once_with(
        SnapshotId="snap-1",
        CreateVolumePermission={"Add": [{"Group": "all"}, {"Group": "all"}, {}]},
    )


def test_empty_permission_set_still_updates(ec2_manager, mock_ec2_client):
    synchronize(ec2_manager, devices("snap-1"), [])

    mock_ec2_client.modify_snapshot_attribute.assert_called_once_with(
        SnapshotId="snap-1", CreateVolumePermission={"Add": []}
    )


@pytest.mark.parametrize("mapping", [[], devices(None, None), devices("")])
def test_no_snapshot_devices(ec2_manager, mock_ec2_client, mapping):
    with pytest.raises(NoSnapshotDevicesError, match="Did not find any devices with EBS snapshots"):
        synchronize(ec2_manager, mapping, PERMISSIONS, "ami-1")

    mock_ec2_client.modify_snapshot_attribute.assert_not_called()


@pytest.mark.parametrize("failing_call", [1, 2, 3])
def test_first_failure_aborts(ec2_manager, mock_ec2_client, failing_call):
    error = client_error()
    side_effects = [None, None, None]
    side_effects[failing_call - 1] = error
    mock_ec2_client.modify_snapshot_attribute.side_effect = side_effects
    snapshot_ids = ["snap-1", "snap-2", "snap-3"]

    with pytest.raises(SyncError) as exc_info:
        synchronize(ec2_manager, devices(*snapshot_ids), PERMISSIONS, "ami-1")

    failed = snapshot_ids[failing_call - 1]
    sync_error = exc_info.value
    assert mock_ec2_client.modify_snapshot_attribute.call_count == failing_call
    assert sync_error.snapshot_id == failed
    assert sync_error.cause is error
    assert failed in str(sync_error)
    assert sync_error.report.applied_snapshot_ids == snapshot_ids[: failing_call - 1]
    assert sync_error.report.failed_snapshot_id == failed
    assert sync_error.report.pending_snapshot_ids == snapshot_ids[failing_call:]


def test_repeated_runs_request_same_content(ec2_manager, mock_ec2_client):
    synchronize(ec2_manager, devices("snap-1", "snap-2"), PERMISSIONS)
    first = list(mock_ec2_client.modify_snapshot_attribute.call_args_list)
    mock_ec2_client.modify_snapshot_attribute.reset_mock()

    synchronize(ec2_manager, devices("snap-1", "snap-2"), PERMISSIONS)

    assert mock_ec2_client.modify_snapshot_attribute.call_args_list == first


def test_dry_run_plans_without_updating(ec2_manager, mock_ec2_client):
    report = synchronize(
        ec2_manager, devices("snap-1", None, "snap-2"), PERMISSIONS, "ami-1", dry_run=True
    )

    mock_ec2_client.modify_snapshot_attribute.assert_not_called()
    assert report.dry_run
    assert report.planned_snapshot_ids == ["snap-1", "snap-2"]
    assert report.applied_snapshot_ids == []


def test_repeated_snapshot_failure_reports_nothing_pending(ec2_manager, mock_ec2_client):
    mock_ec2_client.modify_snapshot_attribute.side_effect = [None, None, client_error()]

    with pytest.raises(SyncError) as exc_info:
        synchronize(ec2_manager, devices("snap-1", "snap-2", "snap-1"), PERMISSIONS, "ami-1")

    report = exc_info.value.report
    assert report.applied_snapshot_ids == ["snap-1", "snap-2"]
    assert report.failed_index == 2
    assert report.pending_snapshot_ids == []


class FakeRemote:
    """Non boto remote that rejects one snapshot."""

    def __init__(self, failing_snapshot_id):
        self.failing_snapshot_id = failing_snapshot_id
        self.updated = []

    def add_create_volume_permissions(self, snapshot_id, permissions):
        if snapshot_id == self.failing_snapshot_id:
            raise RuntimeError("remote rejected")
        self.updated.append(snapshot_id)


def test_injected_remote_failure_is_wrapped():
    remote = FakeRemote("snap-2")

    with pytest.raises(SyncError) as exc_info:
        synchronize(remote, devices("snap-1", "snap-2"), [LaunchPermission(group="all")], "ami-1")

    sync_error = exc_info.value
    assert isinstance(sync_error.__cause__, RuntimeError)
    assert sync_error.snapshot_id == "snap-2"
    assert "remote rejected" in str(sync_error)
    assert sync_error.report.applied_snapshot_ids == ["snap-1"]
    assert remote.updated == ["snap-1"]
