"""
Resource resolution of Elasticsearch nodes.

Every resource quantity left unset (or set to a zero quantity) in a node spec
falls back to the configured default:

============== ======================== =========
Field          Configuration name       Default
============== ======================== =========
CPU limit      DEFAULT_CPU_LIMIT        4000m
CPU request    DEFAULT_CPU_REQUEST      100m
Memory limit   DEFAULT_MEMORY_LIMIT     4Gi
Memory request DEFAULT_MEMORY_REQUEST   1Gi
============== ======================== =========

The resolved memory limit is also the instance RAM handed to the node runtime
as heap sizing hint (see :attr:`ResolvedResources.instance_ram`).
"""

from decimal import InvalidOperation
from typing import Optional
from pydantic import BaseModel, ConfigDict
from kubernetes.client import V1ResourceRequirements
from kubernetes.utils import parse_quantity
import esoperator.config as config
from esoperator.diagnostics import Diagnostics
from esoperator.schemas.nodes import NodeDescriptor


def is_zero_quantity(quantity: Optional[str]) -> bool:
    """
    Tell whether a quantity is absent or zero.

    Malformed quantities are not validated and count as set.

    Args:
        quantity (Optional[str]): Kubernetes quantity string.

    Returns:
        bool: True if the quantity is None, empty or parses to zero.
    """
    if quantity is None or not str(quantity).strip():
        return True
    try:
        return parse_quantity(quantity) == 0
    except (ValueError, InvalidOperation):
        return False


def quantity_or_default(quantity: Optional[str], default: str) -> str:
    """ Return `quantity` unless it is absent or zero, `default` otherwise. """
    if is_zero_quantity(quantity):
        return str(default)
    return str(quantity)


class ResolvedResources(BaseModel):
    """ Fully resolved resources of an Elasticsearch node. """
    cpu_limit: str
    cpu_request: str
    memory_limit: str
    memory_request: str

    model_config = ConfigDict(frozen=True)

    @property
    def instance_ram(self) -> str:
        """ Heap sizing hint of the node. Always the memory limit. """
        return self.memory_limit

    def to_requirements(self) -> V1ResourceRequirements:
        """ Render as Kubernetes container resource requirements. """
        return V1ResourceRequirements(
            limits={"cpu": self.cpu_limit, "memory": self.memory_limit},
            requests={"cpu": self.cpu_request, "memory": self.memory_request},
        )


class ResourceResolver:
    """ Resolves CPU and memory limits and requests of a node. """

    def resolve(self, descriptor: NodeDescriptor, diagnostics: Optional[Diagnostics] = None) -> ResolvedResources:
        """
        Resolve the resources of a node.

        Args:
            descriptor (NodeDescriptor): Node to resolve.
            diagnostics (Optional[Diagnostics]): Collector receiving the chosen memory limit.

        Returns:
            ResolvedResources: Resources with every field set.
        """
        resources = descriptor.spec.resources
        resolved = ResolvedResources(
            cpu_limit=quantity_or_default(resources.limits.cpu, config.DEFAULT_CPU_LIMIT),
            cpu_request=quantity_or_default(resources.requests.cpu, config.DEFAULT_CPU_REQUEST),
            memory_limit=quantity_or_default(resources.limits.memory, config.DEFAULT_MEMORY_LIMIT),
            memory_request=quantity_or_default(resources.requests.memory, config.DEFAULT_MEMORY_REQUEST),
        )
        if diagnostics is not None:
            diagnostics.info(
                descriptor.deploy_name,
                f"Using memory limit: {resolved.memory_limit}, for node {descriptor.deploy_name}"
            )
        return resolved
