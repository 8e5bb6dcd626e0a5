"""Artifact id parsing.

Builders report AMI artifacts as ``<region>:<ami_id>``, for example
``ap-southeast-2:ami-4f8fae2c``. Only the AMI id is required; it is searched
for anywhere in the string.
"""

import re
from typing import Optional

from ami_volume_permissions.core.constants import AMI_ID_PATTERN, ARTIFACT_ID_SEPARATOR
from ami_volume_permissions.utils.exceptions import ParseError

_AMI_ID_RE = re.compile(AMI_ID_PATTERN)
_REGION_RE = re.compile(r"^[a-z]{2}(-[a-z]+)+-\d+$")


def parse_image_id(artifact_id: str) -> str:
    """Return the first AMI id found in the artifact id.

    Raises:
        ParseError: if the artifact id holds no AMI id
    """
    match = _AMI_ID_RE.search(artifact_id or "")
    if not match:
        raise ParseError(artifact_id)
    return match.group(0)


def parse_region(artifact_id: str) -> Optional[str]:
    """Return the region prefix of a ``<region>:<ami_id>`` artifact id, if any."""
    if not artifact_id or ARTIFACT_ID_SEPARATOR not in artifact_id:
        return None
    prefix = artifact_id.split(ARTIFACT_ID_SEPARATOR, 1)[0].strip()
    return prefix if _REGION_RE.match(prefix) else None
