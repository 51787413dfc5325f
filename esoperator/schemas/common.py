"""
Shared Resource Schemas for esoperator

This module defines reusable Pydantic models that represent the resource hints
of an Elasticsearch node. Quantities are expressed as Kubernetes quantity
strings (e.g., "500m" CPU, "4Gi" memory).

Components:
-----------
- `ResourcesDefinition`: CPU and memory quantities for a container.
- `Resources`: Groups `requests` and `limits` for container resources.
- `check_quantity`: Validator for storage sizes given as Kubernetes quantities.

Note:
    Quantity syntax of resource hints is not validated here. Any field left unset (or set to a
    zero quantity) is filled with the configured default by
    :class:`esoperator.resolvers.resources.ResourceResolver`.

Example Usage:
--------------
    >>> Resources(
    ...     requests=ResourcesDefinition(cpu="500m", memory="2Gi"),
    ...     limits=ResourcesDefinition(cpu="2", memory="8Gi")
    ... )
"""

from decimal import InvalidOperation
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from kubernetes.utils import parse_quantity


def check_quantity(value: Optional[str]) -> Optional[str]:
    """
    Validates that a value is a Kubernetes quantity.

    Raises:
        ValueError: If the value cannot be parsed as a quantity.
    """
    if value is None:
        return value
    try:
        parse_quantity(value)
    except (ValueError, InvalidOperation):
        raise ValueError(f"'{value}' is not a valid Kubernetes quantity")
    return value


class ResourcesDefinition(BaseModel):
    """ Defines resource limits or requests such as CPU and memory. """
    cpu: Optional[str] = Field(
        default=None,
        description="Amount of CPU as a Kubernetes quantity (e.g., '500m', '2')."
    )
    memory: Optional[str] = Field(
        default=None,
        description="Amount of memory as a Kubernetes quantity (e.g., '512Mi', '4Gi')."
    )

    model_config = ConfigDict(extra="forbid", frozen=True, coerce_numbers_to_str=True)


class Resources(BaseModel):
    """ Specifies resource requests and limits for an Elasticsearch node. """
    requests: ResourcesDefinition = Field(
        default_factory=ResourcesDefinition,
        description="Resources guaranteed for the container."
    )
    limits: ResourcesDefinition = Field(
        default_factory=ResourcesDefinition,
        description="Maximum resources the container is allowed to consume."
    )

    model_config = ConfigDict(extra="forbid", frozen=True)
