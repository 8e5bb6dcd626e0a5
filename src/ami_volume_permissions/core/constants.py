#!/usr/bin/env python3
"""Core constants for AMI volume permissions."""

# Artifact Parsing Constants
AMI_ID_PATTERN = r"ami-[a-z0-9]+"
ARTIFACT_ID_SEPARATOR = ":"

# EC2 API Constants
LAUNCH_PERMISSION_ATTRIBUTE = "launchPermission"

# AWS Service Constants
DEFAULT_AWS_REGION = "ap-southeast-2"
EC2_SERVICE_NAME = "ec2"

# Configuration Constants
CONFIG_DIR_ENV_VAR = "AMI_PERMS_CONFIG_DIR"
DEFAULT_CONFIG_DIR = "configs"

# File and Directory Constants
DEFAULT_LOG_DIR = "logs"
LOG_ROTATION_MAX_BYTES = 10 * 1024 * 1024  # 10MB
LOG_BACKUP_COUNT = 5

# Logging Constants
PACKAGE_LOGGER_NAME = "ami_volume_permissions"
