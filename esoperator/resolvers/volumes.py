"""
Volume resolution of Elasticsearch nodes.

A node has up to three volumes:

- ``elasticsearch-storage``: the node data directory. Its source is chosen
  from the storage spec of the node (see :class:`esoperator.schemas.storage.storage.StorageSpec`).
- ``elasticsearch-config``: the config map named after the cluster.
- ``certificates``: the secret ``<cluster>-certs``, only for secure nodes.

The container mounts are derived from :func:`volume_names`, which is also used
to build the volumes, so that volumes and mounts always match one to one.
"""

from typing import List, Optional
from kubernetes.client import V1ConfigMapVolumeSource, V1SecretVolumeSource, V1Volume
from esoperator.diagnostics import Diagnostics
from esoperator.exceptions import ESOperatorException
from esoperator.kube.claim_store import ClaimStore
from esoperator.schemas.nodes import NodeDescriptor
from esoperator.schemas.storage.storage import StorageSpec


STORAGE_VOLUME_NAME = "elasticsearch-storage"
CONFIG_VOLUME_NAME = "elasticsearch-config"
CERTS_VOLUME_NAME = "certificates"


def volume_names(descriptor: NodeDescriptor) -> List[str]:
    """
    Names of the volumes of a node, in pod order.

    Args:
        descriptor (NodeDescriptor): Node description.

    Returns:
        List[str]: Volume names; the certificates volume is present iff the node is secure.
    """
    names = [STORAGE_VOLUME_NAME, CONFIG_VOLUME_NAME]
    if descriptor.secure:
        names.append(CERTS_VOLUME_NAME)
    return names


def certs_secret_name(cluster_name: str) -> str:
    return f"{cluster_name}-certs"


class VolumeSourceResolver:
    """ Resolves the volume of the node data directory and the node volumes. """

    def __init__(self, store: ClaimStore):
        """
        Initialize the resolver.

        Args:
            store (ClaimStore): Store used to provision claims of claim template storage.
        """
        self.store = store

    def resolve(self, storage: StorageSpec, descriptor: NodeDescriptor,
                diagnostics: Optional[Diagnostics] = None) -> V1Volume:
        """
        Resolve the volume of the node data directory.

        The storage variant is chosen by precedence order. For claim template
        storage the claim is upserted through the claim store; the volume
        refers to the claim even when the upsert fails.

        Args:
            storage (StorageSpec): Storage spec of the node.
            descriptor (NodeDescriptor): Node description.
            diagnostics (Optional[Diagnostics]): Collector for diagnostics.

        Returns:
            V1Volume: Storage volume, without any volume source when no storage variant is configured.
        """
        diagnostics = diagnostics if diagnostics is not None else Diagnostics()
        node = descriptor.deploy_name

        populated = storage.populated()
        if len(populated) > 1:
            diagnostics.warning(
                node,
                f"Several storage variants configured for node {node} "
                f"({', '.join(kind.value for kind in populated)}), using {populated[0].value}"
            )

        selected = storage.selected()
        if selected is None:
            diagnostics.warning(node, f"Unknown volume source for node {node}")
            return V1Volume(name=STORAGE_VOLUME_NAME)

        node_storage = selected.create_storage_instance()
        claim = node_storage.desired_claim(node, descriptor.namespace)
        if claim is not None:
            try:
                self.store.create_or_update_persistent_volume_claim(
                    claim.metadata.namespace, claim.metadata.name, claim.spec
                )
            except ESOperatorException as err:
                diagnostics.error(node, f"Unable to create PersistentVolumeClaim: {err}")

        return node_storage.volume(STORAGE_VOLUME_NAME, node)

    def volumes(self, descriptor: NodeDescriptor, diagnostics: Optional[Diagnostics] = None) -> List[V1Volume]:
        """
        Build the volumes of a node.

        Args:
            descriptor (NodeDescriptor): Node description.
            diagnostics (Optional[Diagnostics]): Collector for diagnostics.

        Returns:
            List[V1Volume]: Volumes in the order given by :func:`volume_names`.
        """
        vols = []
        for name in volume_names(descriptor):
            if name == STORAGE_VOLUME_NAME:
                vols.append(self.resolve(descriptor.spec.storage, descriptor, diagnostics))
            elif name == CONFIG_VOLUME_NAME:
                vols.append(V1Volume(name=name, config_map=V1ConfigMapVolumeSource(name=descriptor.cluster_name)))
            elif name == CERTS_VOLUME_NAME:
                vols.append(V1Volume(
                    name=name,
                    secret=V1SecretVolumeSource(secret_name=certs_secret_name(descriptor.cluster_name)),
                ))
        return vols
