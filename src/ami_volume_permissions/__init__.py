"""Copy AMI launch permissions to the create volume permissions of its snapshots."""

__version__ = "1.0.0"
