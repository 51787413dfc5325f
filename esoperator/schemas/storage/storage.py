"""
Storage specification of an Elasticsearch node.

:class:`StorageSpec` is a closed set of four storage variants. A valid node
description populates exactly one of them. When several are populated the
variant is chosen by a fixed precedence order:

    host_path > empty_dir > volume_claim_template > persistent_volume_claim

When none is populated, :meth:`StorageSpec.selected` returns ``None`` and the
node resolves to an empty volume source.

YAML Example:
-------------
.. code-block:: yaml

    storage:
      persistent_volume_claim:
        claim_name: es-data-0
"""

from enum import Enum
from typing import Optional, Tuple, Union
from pydantic import BaseModel, ConfigDict, Field
from esoperator.schemas.storage.host_path import HostPathStorageConfig
from esoperator.schemas.storage.empty_dir import EmptyDirStorageConfig
from esoperator.schemas.storage.claim_template import VolumeClaimTemplateConfig
from esoperator.schemas.storage.existing_claim import ExistingClaimStorageConfig


StorageVariant = Union[
    HostPathStorageConfig,
    EmptyDirStorageConfig,
    VolumeClaimTemplateConfig,
    ExistingClaimStorageConfig,
]


class StorageKind(str, Enum):
    """ Storage variants, in precedence order. """
    HOST_PATH = "host_path"
    EMPTY_DIR = "empty_dir"
    VOLUME_CLAIM_TEMPLATE = "volume_claim_template"
    PERSISTENT_VOLUME_CLAIM = "persistent_volume_claim"


PRECEDENCE: Tuple[StorageKind, ...] = tuple(StorageKind)


class StorageSpec(BaseModel):
    """ Storage specification of an Elasticsearch node. """

    host_path: Optional[HostPathStorageConfig] = Field(None, description="Directory on the Kubernetes host")
    empty_dir: Optional[EmptyDirStorageConfig] = Field(None, description="Ephemeral directory tied to the pod lifetime")
    volume_claim_template: Optional[VolumeClaimTemplateConfig] = Field(
        None, description="Template of a PersistentVolumeClaim provisioned for the node"
    )
    persistent_volume_claim: Optional[ExistingClaimStorageConfig] = Field(
        None, description="Reference to an existing PersistentVolumeClaim"
    )

    model_config = ConfigDict(extra="forbid", frozen=True)

    def kind(self) -> Optional[StorageKind]:
        """
        Storage variant in effect.

        Returns:
            Optional[StorageKind]: First populated variant in precedence order, or None.
        """
        for kind in PRECEDENCE:
            if getattr(self, kind.value) is not None:
                return kind
        return None

    def selected(self) -> Optional[StorageVariant]:
        """
        Configuration of the storage variant in effect.

        Returns:
            Optional[StorageVariant]: Schema of the winning variant, or None if no variant is populated.
        """
        kind = self.kind()
        if kind is None:
            return None
        return getattr(self, kind.value)

    def populated(self) -> Tuple[StorageKind, ...]:
        """ All populated variants, in precedence order. """
        return tuple(kind for kind in PRECEDENCE if getattr(self, kind.value) is not None)
