"""Exception classes for AMI volume permissions.

Every failure of a post-process run is raised as a subclass of
``AmiPermissionsError`` carrying the artifact, image or snapshot id that
failed. The underlying remote error, when there is one, is kept in ``cause``
and chained with ``raise ... from``.
"""

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ami_volume_permissions.core.models import SyncReport


class AmiPermissionsError(Exception):
    """Base class for all post-process failures."""

    stage = "post-process"


class ParseError(AmiPermissionsError):
    """The artifact id does not contain an AMI id."""

    stage = "parse"

    def __init__(self, artifact_id: str):
        self.artifact_id = artifact_id
        super().__init__(f"could not find AMI ID in artifact id '{artifact_id}'")


class ConfigurationError(AmiPermissionsError):
    """Credentials or region could not be turned into an AWS session."""

    stage = "configuration"


class FetchError(AmiPermissionsError):
    """Reading an image attribute failed."""

    stage = "fetch"

    def __init__(self, image_id: str, cause: Exception, what: str = "attributes"):
        self.image_id = image_id
        self.cause = cause
        self.what = what
        super().__init__(f"could not get image {what} for image {image_id}: {cause}")


class NoSnapshotDevicesError(AmiPermissionsError):
    """The image has no EBS snapshot backed device."""

    stage = "synchronize"

    def __init__(self, image_id: Optional[str] = None):
        self.image_id = image_id
        message = "Did not find any devices with EBS snapshots"
        if image_id:
            message = f"{message} for image {image_id}"
        super().__init__(message)


class SyncError(AmiPermissionsError):
    """Adding create volume permissions to a snapshot failed.

    ``report`` holds the snapshots already updated before the failure; they
    are not rolled back.
    """

    stage = "synchronize"

    def __init__(
        self,
        snapshot_id: str,
        cause: Exception,
        report: Optional["SyncReport"] = None,
    ):
        self.snapshot_id = snapshot_id
        self.cause = cause
        self.report = report
        super().__init__(
            f"could not modify snapshot attributes for snapshot {snapshot_id}: {cause}"
        )
