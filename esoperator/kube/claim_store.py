"""
Claim stores for esoperator.

A claim store applies desired PersistentVolumeClaims to a cluster. Storage
resolution only talks to the abstract :class:`ClaimStore`, so that node
resolution can run against a live cluster (:class:`KubeClaimStore`), without
one (:class:`DryRunClaimStore`), or against a mock in tests.

Key Components:
---------------
- **ClaimStore**: Abstract interface with the single idempotent upsert operation.
- **KubeClaimStore**: Upserts claims through the Kubernetes core/v1 API.
- **DryRunClaimStore**: Records desired claims without contacting a cluster.

Usage Example:
--------------
.. code-block:: python

    kal.connect()
    store = KubeClaimStore()
    store.create_or_update_persistent_volume_claim("logging", "data-es-node-1", spec)
"""

import urllib3
from abc import ABC, abstractmethod
from typing import Dict, List, Optional
from kubernetes.client import V1ObjectMeta, V1PersistentVolumeClaim, V1PersistentVolumeClaimSpec
from kubernetes.client.rest import ApiException
from kubernetes.utils import parse_quantity
import esoperator.config as config
from esoperator.exceptions import ClaimProvisioningError
from esoperator.kube.kube_access_layer import kal
from esoperator.logger import logger


class ClaimStore(ABC):
    """ Abstract base class for PersistentVolumeClaim stores. """

    @abstractmethod
    def create_or_update_persistent_volume_claim(self, namespace: str, name: str,
                                                 spec: V1PersistentVolumeClaimSpec) -> None:
        """
        Make sure a PersistentVolumeClaim with the desired spec exists.

        Must be idempotent: repeated calls with an identical spec change nothing.

        Args:
            namespace (str): Namespace of the claim.
            name (str): Name of the claim.
            spec (V1PersistentVolumeClaimSpec): Desired claim specification.

        Raises:
            ClaimProvisioningError: If the claim could not be created or updated.
        """
        pass


def _storage_requests(spec: Optional[V1PersistentVolumeClaimSpec]) -> Dict[str, object]:
    """ Storage requests of a claim spec, with quantities parsed for comparison. """
    if spec is None or spec.resources is None or not spec.resources.requests:
        return {}
    return {key: parse_quantity(value) for key, value in spec.resources.requests.items()}


class KubeClaimStore(ClaimStore):
    """ Claim store backed by the Kubernetes API server. """

    def create_or_update_persistent_volume_claim(self, namespace: str, name: str,
                                                 spec: V1PersistentVolumeClaimSpec) -> None:
        """
        Create the claim when missing, otherwise update its storage requests if they changed.

        Only the storage requests of an existing claim are updated, as the other
        fields of a claim spec are immutable once bound.

        See parent method for argument descriptions.
        """
        api = kal.core_api()
        timeout = config.KUBE_REQUEST_TIMEOUT
        try:
            try:
                existing = api.read_namespaced_persistent_volume_claim(name, namespace, _request_timeout=timeout)
            except ApiException as err:
                if err.status != 404:
                    raise
                existing = None

            if existing is None:
                body = V1PersistentVolumeClaim(
                    api_version="v1",
                    kind="PersistentVolumeClaim",
                    metadata=V1ObjectMeta(name=name, namespace=namespace),
                    spec=spec,
                )
                api.create_namespaced_persistent_volume_claim(namespace, body, _request_timeout=timeout)
                logger.info(f"Created PersistentVolumeClaim {namespace}/{name}")
                return

            if _storage_requests(existing.spec) == _storage_requests(spec):
                return

            patch = {"spec": {"resources": {"requests": dict(spec.resources.requests)}}}
            api.patch_namespaced_persistent_volume_claim(name, namespace, patch, _request_timeout=timeout)
            logger.info(f"Updated storage requests of PersistentVolumeClaim {namespace}/{name}")
        except ApiException as err:
            raise ClaimProvisioningError(
                f"PersistentVolumeClaim {namespace}/{name} could not be applied: {err.status} {err.reason}"
            ) from err
        except urllib3.exceptions.HTTPError as err:
            raise ClaimProvisioningError(
                f"PersistentVolumeClaim {namespace}/{name} could not be applied: {err}"
            ) from err
        except ValueError as err:
            raise ClaimProvisioningError(
                f"PersistentVolumeClaim {namespace}/{name} has an invalid storage request: {err}"
            ) from err


class DryRunClaimStore(ClaimStore):
    """ Claim store recording desired claims without contacting a cluster. """

    def __init__(self) -> None:
        self.claims: List[V1PersistentVolumeClaim] = []

    def create_or_update_persistent_volume_claim(self, namespace: str, name: str,
                                                 spec: V1PersistentVolumeClaimSpec) -> None:
        """
        Record the desired claim, replacing an earlier record of the same claim.

        See parent method for argument descriptions.
        """
        self.claims = [
            claim for claim in self.claims
            if (claim.metadata.namespace, claim.metadata.name) != (namespace, name)
        ]
        self.claims.append(V1PersistentVolumeClaim(
            api_version="v1",
            kind="PersistentVolumeClaim",
            metadata=V1ObjectMeta(name=name, namespace=namespace),
            spec=spec,
        ))
