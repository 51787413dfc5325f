""" Ephemeral (empty dir) storage schema. Data is lost when the pod is removed. """

from typing import Literal, Optional
from pydantic import Field, field_validator
from esoperator.schemas.common import check_quantity
from esoperator.schemas.storage.base_storage import BaseStorageConfig


class EmptyDirStorageConfig(BaseStorageConfig):
    """ Configuration schema for empty dir storage. """

    medium: Optional[Literal["", "Memory"]] = Field(None, description="Storage medium backing the directory")
    size_limit: Optional[str] = Field(None, description="Size limit as a Kubernetes quantity (e.g., '10Gi')")

    @field_validator("size_limit")
    def validate_size_limit(cls, value: Optional[str]) -> Optional[str]:
        return check_quantity(value)
