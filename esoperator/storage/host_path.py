""" Host path implementation of the node storage. """

from kubernetes.client import V1HostPathVolumeSource, V1Volume
from esoperator.schemas.storage.host_path import HostPathStorageConfig
from esoperator.storage.backend import NodeStorage
from esoperator.storage.registry import register_storage


@register_storage(HostPathStorageConfig)
class HostPathStorage(NodeStorage):
    """ Node data directory on the Kubernetes host. """

    def volume(self, name: str, deploy_name: str) -> V1Volume:
        return V1Volume(
            name=name,
            host_path=V1HostPathVolumeSource(path=self.config.path, type=self.config.type),
        )
