""" Existing PersistentVolumeClaim storage schema. The claim is not managed by esoperator. """

from pydantic import Field
from esoperator.schemas.storage.base_storage import BaseStorageConfig


class ExistingClaimStorageConfig(BaseStorageConfig):
    """ Configuration schema referencing an existing PersistentVolumeClaim. """

    claim_name: str = Field(..., min_length=1, description="Name of the existing claim")
    read_only: bool = Field(False, description="Mount the claim read-only")
