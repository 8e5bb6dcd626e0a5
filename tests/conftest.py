import pytest
from unittest.mock import MagicMock

from ami_volume_permissions.core.aws import EC2Manager
from ami_volume_permissions.utils.config import AccessConfig, ConfigManager
from ami_volume_permissions.utils.reporter import ProgressReporter

AWS_ENV_VARS = (
    "AWS_REGION",
    "AWS_DEFAULT_REGION",
    "AWS_PROFILE",
    "AWS_ACCESS_KEY_ID",
    "AWS_SECRET_ACCESS_KEY",
    "AWS_SESSION_TOKEN",
    "AMI_PERMS_CONFIG_DIR",
)


@pytest.fixture(autouse=True)
def clean_aws_env(monkeypatch, tmp_path):
    """Keep the developer's AWS environment out of the tests."""
    for name in AWS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("AWS_CONFIG_FILE", str(tmp_path / "aws_config"))
    monkeypatch.setenv("AWS_SHARED_CREDENTIALS_FILE", str(tmp_path / "aws_credentials"))


@pytest.fixture
def launch_permissions():
    return [{"Group": "all"}, {"UserId": "123456789012"}]


@pytest.fixture
def image():
    return {
        "ImageId": "ami-4f8fae2c",
        "Name": "app-1.0.0",
        "State": "available",
        "BlockDeviceMappings": [
            {"DeviceName": "/dev/sda1", "Ebs": {"SnapshotId": "snap-111", "VolumeSize": 8}},
            {"DeviceName": "/dev/sdb", "VirtualName": "ephemeral0"},
            {"DeviceName": "/dev/sdc", "Ebs": {"SnapshotId": "snap-222", "VolumeSize": 20}},
        ],
    }


@pytest.fixture
def mock_ec2_client(launch_permissions, image):
    mock_client = MagicMock()
    mock_client.describe_image_attribute.return_value = {
        "ImageId": image["ImageId"],
        "LaunchPermissions": launch_permissions,
    }
    mock_client.describe_images.return_value = {"Images": [image]}
    mock_client.modify_snapshot_attribute.return_value = {
        "ResponseMetadata": {"RequestId": "test-request-id-123", "HTTPStatusCode": 200}
    }
    return mock_client


@pytest.fixture
def ec2_manager(mock_ec2_client):
    return EC2Manager(client=mock_ec2_client, region="ap-southeast-2")


@pytest.fixture
def reporter():
    return ProgressReporter()


@pytest.fixture
def config_manager(tmp_path):
    return ConfigManager(tmp_path / "configs")


@pytest.fixture
def access_config():
    return AccessConfig(
        region="ap-southeast-2",
        access_key="mock_access_key",
        secret_key="mock_secret_key",
        token="mock_session_token",
    )
