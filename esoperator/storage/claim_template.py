"""
Claim template implementation of the node storage.

Each node gets its own PersistentVolumeClaim, named
``<template name>-<deploy name>``, so that the name is stable across
reconciliation passes and the claim survives pod restarts.

.. seealso::

   The schema of the claim template is :class:`esoperator.schemas.storage.claim_template.VolumeClaimTemplateConfig`.
"""

from kubernetes.client import (
    V1ObjectMeta,
    V1PersistentVolumeClaim,
    V1PersistentVolumeClaimSpec,
    V1PersistentVolumeClaimVolumeSource,
    V1Volume,
    V1VolumeResourceRequirements,
)
from esoperator.schemas.storage.claim_template import VolumeClaimTemplateConfig
from esoperator.storage.backend import NodeStorage
from esoperator.storage.registry import register_storage


@register_storage(VolumeClaimTemplateConfig)
class ClaimTemplateStorage(NodeStorage):
    """ Node data directory on a claim provisioned from a template. """

    def claim_name(self, deploy_name: str) -> str:
        """
        Deterministic name of the claim of a node.

        Args:
            deploy_name (str): Deployment name of the node.

        Returns:
            str: ``<template name>-<deploy name>``
        """
        return f"{self.config.name}-{deploy_name}"

    def claim_spec(self) -> V1PersistentVolumeClaimSpec:
        """ Claim specification rendered from the template. """
        spec = self.config.spec
        return V1PersistentVolumeClaimSpec(
            access_modes=list(spec.access_modes),
            storage_class_name=spec.storage_class_name,
            volume_mode=spec.volume_mode,
            resources=V1VolumeResourceRequirements(requests={"storage": spec.storage}),
        )

    def desired_claim(self, deploy_name: str, namespace: str) -> V1PersistentVolumeClaim:
        return V1PersistentVolumeClaim(
            api_version="v1",
            kind="PersistentVolumeClaim",
            metadata=V1ObjectMeta(name=self.claim_name(deploy_name), namespace=namespace),
            spec=self.claim_spec(),
        )

    def volume(self, name: str, deploy_name: str) -> V1Volume:
        return V1Volume(
            name=name,
            persistent_volume_claim=V1PersistentVolumeClaimVolumeSource(claim_name=self.claim_name(deploy_name)),
        )
