"""
Elasticsearch Node Resolver

This module runs the full resolution of Elasticsearch node descriptions into
the Kubernetes artifacts consumed by the orchestration layer.

Key Components:
---------------
- **NodeResolution**: Resolved artifacts of one node (container, volumes,
  affinity, node selector, pod labels) and the diagnostics recorded while
  resolving it.
- **NodeResolver**: Resolves one `NodeDescriptor` into a `NodeResolution`.
- **resolve_nodes**: Resolves several nodes, isolating failures per node.

Resolution is recomputed from scratch on every call; resolving the same
descriptor twice yields equal artifacts (see :meth:`NodeResolution.to_dict`).

Usage Example:
--------------
.. code-block:: python

    resolver = NodeResolver(DryRunClaimStore())
    resolution = resolver.resolve(descriptor)
    resolution.diagnostics.emit(logger)
    pod_spec = resolution.pod_spec()
"""

from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Dict, List, Optional
from kubernetes.client import ApiClient, V1Affinity, V1Container, V1PodSpec, V1Volume
import esoperator.config as config
from esoperator.diagnostics import Diagnostics
from esoperator.exceptions import ESOperatorException, StorageConfigurationError
from esoperator.kube.claim_store import ClaimStore
from esoperator.logger import logger
from esoperator.resolvers.container import ContainerSpecBuilder
from esoperator.resolvers.policy import anti_affinity
from esoperator.resolvers.volumes import VolumeSourceResolver
from esoperator.schemas.nodes import NodeDescriptor


@lru_cache(maxsize=1)
def _api_client() -> ApiClient:
    return ApiClient()


def serialize(obj: Any) -> Any:
    """ Render Kubernetes model objects as plain dictionaries, as sent to the API server. """
    return _api_client().sanitize_for_serialization(obj)


@dataclass
class NodeResolution:
    """ Resolved Kubernetes artifacts of an Elasticsearch node. """

    descriptor: NodeDescriptor
    container: V1Container
    volumes: List[V1Volume]
    affinity: V1Affinity
    node_selector: Optional[Dict[str, str]]
    labels: Dict[str, str]
    diagnostics: Diagnostics = field(default_factory=Diagnostics)

    def pod_spec(self) -> V1PodSpec:
        """ Pod spec running the node. """
        return V1PodSpec(
            containers=[self.container],
            volumes=self.volumes,
            affinity=self.affinity,
            node_selector=self.node_selector,
        )

    def to_dict(self) -> Dict[str, Any]:
        """
        Deterministic rendering of the resolved artifacts.

        Returns:
            Dict[str, Any]: Node identity, pod labels and pod spec. Diagnostics are not included.
        """
        return {
            "name": self.descriptor.deploy_name,
            "namespace": self.descriptor.namespace,
            "labels": dict(self.labels),
            "spec": serialize(self.pod_spec()),
        }


def pod_labels(descriptor: NodeDescriptor) -> Dict[str, str]:
    """ Labels of the node pod, matched by the anti-affinity rule and the POD_LABEL selector. """
    return {"cluster": descriptor.cluster_name, "role": descriptor.role.value}


def node_selector(descriptor: NodeDescriptor) -> Optional[Dict[str, str]]:
    """ Node selector of the node pod, None when the spec does not define one. """
    if not descriptor.spec.node_selector:
        return None
    return dict(descriptor.spec.node_selector)


class NodeResolver:
    """ Resolves Elasticsearch node descriptions into Kubernetes artifacts. """

    def __init__(self, store: ClaimStore, container_builder: Optional[ContainerSpecBuilder] = None):
        """
        Initialize the NodeResolver.

        Args:
            store (ClaimStore): Store provisioning the claims of claim template storage.
            container_builder (Optional[ContainerSpecBuilder]): Builder of the Elasticsearch container.
        """
        self.volume_resolver = VolumeSourceResolver(store)
        self.container_builder = container_builder or ContainerSpecBuilder()

    def resolve(self, descriptor: NodeDescriptor) -> NodeResolution:
        """
        Resolve a node.

        Storage and provisioning problems are recorded as diagnostics and do not
        abort the resolution, unless `STRICT_STORAGE` is enabled.

        Args:
            descriptor (NodeDescriptor): Node to resolve.

        Returns:
            NodeResolution: Resolved artifacts of the node.

        Raises:
            StorageConfigurationError: If `STRICT_STORAGE` is enabled and the node has no storage configured.
        """
        if config.STRICT_STORAGE and descriptor.spec.storage.selected() is None:
            raise StorageConfigurationError(f"No storage configured for node {descriptor.deploy_name}")

        diagnostics = Diagnostics()
        container = self.container_builder.build(descriptor, diagnostics)
        volumes = self.volume_resolver.volumes(descriptor, diagnostics)
        return NodeResolution(
            descriptor=descriptor,
            container=container,
            volumes=volumes,
            affinity=anti_affinity(descriptor.role),
            node_selector=node_selector(descriptor),
            labels=pod_labels(descriptor),
            diagnostics=diagnostics,
        )


def resolve_nodes(nodes: Dict[str, NodeDescriptor], store: ClaimStore) -> Dict[str, NodeResolution]:
    """
    Resolve several nodes.

    A node failing to resolve is logged and left out; it does not prevent the
    other nodes from being resolved. Diagnostics of every node are logged.

    Args:
        nodes (Dict[str, NodeDescriptor]): Node descriptions by name.
        store (ClaimStore): Store provisioning the claims of claim template storage.

    Returns:
        Dict[str, NodeResolution]: Resolutions of the nodes that could be resolved.
    """
    resolver = NodeResolver(store)
    resolutions = {}
    for name, descriptor in nodes.items():
        try:
            resolution = resolver.resolve(descriptor)
        except ESOperatorException as err:
            logger.error(f"Node {name} could not be resolved: {err}")
            continue
        resolution.diagnostics.emit(logger)
        resolutions[name] = resolution
    return resolutions
