""" Existing PersistentVolumeClaim implementation of the node storage. """

from kubernetes.client import V1PersistentVolumeClaimVolumeSource, V1Volume
from esoperator.schemas.storage.existing_claim import ExistingClaimStorageConfig
from esoperator.storage.backend import NodeStorage
from esoperator.storage.registry import register_storage


@register_storage(ExistingClaimStorageConfig)
class ExistingClaimStorage(NodeStorage):
    """ Node data directory on a claim managed outside of esoperator. """

    def volume(self, name: str, deploy_name: str) -> V1Volume:
        return V1Volume(
            name=name,
            persistent_volume_claim=V1PersistentVolumeClaimVolumeSource(
                claim_name=self.config.claim_name,
                read_only=self.config.read_only,
            ),
        )
