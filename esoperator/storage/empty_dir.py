""" Empty dir implementation of the node storage. """

from kubernetes.client import V1EmptyDirVolumeSource, V1Volume
from esoperator.schemas.storage.empty_dir import EmptyDirStorageConfig
from esoperator.storage.backend import NodeStorage
from esoperator.storage.registry import register_storage


@register_storage(EmptyDirStorageConfig)
class EmptyDirStorage(NodeStorage):
    """ Ephemeral node data directory. """

    def volume(self, name: str, deploy_name: str) -> V1Volume:
        return V1Volume(
            name=name,
            empty_dir=V1EmptyDirVolumeSource(medium=self.config.medium, size_limit=self.config.size_limit),
        )
