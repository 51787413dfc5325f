"""
Abstract base class for the storage of an Elasticsearch node.

A :class:`NodeStorage` turns a validated storage variant schema into the
Kubernetes volume of the node data directory. Variants that need a
cluster object to exist first (the claim template) additionally describe that
object through :meth:`NodeStorage.desired_claim`. Computing the desired claim
is pure; applying it is left to a
:class:`esoperator.kube.claim_store.ClaimStore`.

Warning:
   The `NodeStorage` class is an abstract class not intented to be used.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional
from kubernetes.client import V1PersistentVolumeClaim, V1Volume


class NodeStorage(ABC):
    """
    Abstract base class defining the interface for all node storage variants.
    """

    def __init__(self, config: Any):
        """
        Initialize the storage.

        Args:
            config (Any): Validated storage variant schema.
        """
        self.config = config

    @abstractmethod
    def volume(self, name: str, deploy_name: str) -> V1Volume:
        """
        Build the volume of the node data directory.

        Args:
            name (str): Name of the volume.
            deploy_name (str): Deployment name of the node.

        Returns:
            V1Volume: Volume with exactly one populated volume source.

        Raises:
            NotImplementedError: Must be implemented in a subclass.
        """
        raise NotImplementedError("volume() must be implemented in a subclass")

    def desired_claim(self, deploy_name: str, namespace: str) -> Optional[V1PersistentVolumeClaim]:
        """
        Describe the PersistentVolumeClaim that must exist for this storage.

        By default, storage variants need no claim to be provisioned.

        Returns:
            Optional[V1PersistentVolumeClaim]: Desired claim, or None.
        """
        return None
