"""
Claim template storage schema.

A claim template provisions one PersistentVolumeClaim per node at resolution
time. The claim is named ``<template name>-<deploy name>``.

YAML Example:
-------------
.. code-block:: yaml

    storage:
      volume_claim_template:
        name: data
        spec:
          storage_class_name: gp2
          storage: 50Gi
"""

from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from esoperator.schemas.common import check_quantity
from esoperator.schemas.storage.base_storage import BaseStorageConfig


class ClaimSpecConfig(BaseModel):
    """ Desired PersistentVolumeClaim specification. """

    access_modes: List[str] = Field(
        default_factory=lambda: ["ReadWriteOnce"],
        description="Access modes of the claim (e.g., ['ReadWriteOnce'])"
    )
    storage_class_name: Optional[str] = Field(None, description="Storage class of the claim")
    volume_mode: Optional[Literal["Filesystem", "Block"]] = Field(None, description="Volume mode of the claim")
    storage: str = Field(..., description="Requested storage as a Kubernetes quantity (e.g., '50Gi')")

    model_config = ConfigDict(extra="forbid", frozen=True, coerce_numbers_to_str=True)

    @field_validator("storage")
    def validate_storage(cls, value: str) -> str:
        """ Validates that the requested storage is a Kubernetes quantity. """
        return check_quantity(value)

    @field_validator("access_modes")
    def validate_access_modes(cls, value: List[str]) -> List[str]:
        """
        Validates that at least one known access mode is given.

        Raises:
            ValueError: If the list is empty or holds an unknown access mode.
        """
        allowed = {"ReadWriteOnce", "ReadOnlyMany", "ReadWriteMany", "ReadWriteOncePod"}
        if not value:
            raise ValueError("access_modes cannot be empty")
        unknown = [mode for mode in value if mode not in allowed]
        if unknown:
            raise ValueError(f"unknown access modes {unknown}. Allowed: {sorted(allowed)}")
        return value


class VolumeClaimTemplateConfig(BaseStorageConfig):
    """ Configuration schema for claim template storage. """

    name: str = Field(..., min_length=1, description="Template name, used as prefix of the claim name")
    spec: ClaimSpecConfig = Field(..., description="Specification of the claims created from this template")
