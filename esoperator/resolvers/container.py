"""
Elasticsearch container builder.

:class:`ContainerSpecBuilder` aggregates the resolved resources, the
environment contract, the probe and the volume mounts of a node into the
Kubernetes container running Elasticsearch.
"""

from typing import List, Optional
from kubernetes.client import V1Container, V1ContainerPort, V1VolumeMount
import esoperator.config as config
from esoperator.diagnostics import Diagnostics
from esoperator.resolvers.environment import EnvironmentComposer
from esoperator.resolvers.policy import readiness_probe
from esoperator.resolvers.resources import ResolvedResources, ResourceResolver
from esoperator.resolvers.volumes import (
    CERTS_VOLUME_NAME,
    CONFIG_VOLUME_NAME,
    STORAGE_VOLUME_NAME,
    volume_names,
)
from esoperator.schemas.nodes import NodeDescriptor


CONTAINER_NAME = "elasticsearch"


def mount_path(volume_name: str) -> str:
    """
    Mount point of a node volume inside the Elasticsearch container.

    Raises:
        KeyError: If the volume is not a node volume.
    """
    return {
        STORAGE_VOLUME_NAME: config.ELASTICSEARCH_STORAGE_PATH,
        CONFIG_VOLUME_NAME: config.ELASTICSEARCH_CONFIG_PATH,
        CERTS_VOLUME_NAME: config.ELASTICSEARCH_CERTS_PATH,
    }[volume_name]


def volume_mounts(descriptor: NodeDescriptor) -> List[V1VolumeMount]:
    """ One mount per node volume, the certificates mount only for secure nodes. """
    return [V1VolumeMount(name=name, mount_path=mount_path(name)) for name in volume_names(descriptor)]


def container_ports() -> List[V1ContainerPort]:
    return [
        V1ContainerPort(name="cluster", container_port=config.CLUSTER_TRANSPORT_PORT, protocol="TCP"),
        V1ContainerPort(name="restapi", container_port=config.REST_API_PORT, protocol="TCP"),
    ]


def container_image(descriptor: NodeDescriptor) -> str:
    return descriptor.spec.image or config.ELASTICSEARCH_DEFAULT_IMAGE


class ContainerSpecBuilder:
    """ Builds the Elasticsearch container of a node. """

    def __init__(self,
                 resource_resolver: Optional[ResourceResolver] = None,
                 environment_composer: Optional[EnvironmentComposer] = None):
        self.resource_resolver = resource_resolver or ResourceResolver()
        self.environment_composer = environment_composer or EnvironmentComposer()

    def build(self, descriptor: NodeDescriptor, diagnostics: Optional[Diagnostics] = None,
              resources: Optional[ResolvedResources] = None) -> V1Container:
        """
        Build the container of a node.

        Args:
            descriptor (NodeDescriptor): Node description.
            diagnostics (Optional[Diagnostics]): Collector for diagnostics.
            resources (Optional[ResolvedResources]): Already resolved resources of the node.
                Resolved from the descriptor when not given.

        Returns:
            V1Container: The Elasticsearch container.
        """
        if resources is None:
            resources = self.resource_resolver.resolve(descriptor, diagnostics)
        probe = readiness_probe()
        return V1Container(
            name=CONTAINER_NAME,
            image=container_image(descriptor),
            image_pull_policy="Always",
            env=self.environment_composer.compose(descriptor, resources),
            ports=container_ports(),
            readiness_probe=probe,
            liveness_probe=probe,
            volume_mounts=volume_mounts(descriptor),
            resources=resources.to_requirements(),
        )
