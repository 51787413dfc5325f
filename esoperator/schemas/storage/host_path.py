"""
Host path storage schema.

The node data directory is a directory of the Kubernetes host the pod is
scheduled on. Intended for development or for nodes pinned to hosts with a
node selector.
"""

import os
from typing import Optional
from pydantic import Field, field_validator
from esoperator.schemas.storage.base_storage import BaseStorageConfig


class HostPathStorageConfig(BaseStorageConfig):
    """ Configuration schema for host path storage. """

    path: str = Field(..., description="Absolute path of the directory on the host")
    type: Optional[str] = Field(None, description="Kubernetes host path type (e.g., 'DirectoryOrCreate')")

    @field_validator("path")
    def validate_path(cls, value: str) -> str:
        """
        Validates that the host path is absolute.

        Args:
            value (str): Path to validate.

        Returns:
            str: Normalized absolute path.

        Raises:
            ValueError: If the path is not absolute.
        """
        if not value.startswith("/"):
            raise ValueError("path must be an absolute path on the host")
        return os.path.normpath(value)
