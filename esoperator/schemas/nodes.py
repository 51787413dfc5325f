"""
Elasticsearch Node Schemas

This module defines Pydantic models and utility functions to parse and validate
node description files for esoperator. A node description is the desired state
of one Elasticsearch cluster member: its identity, its role, whether the
cluster runs in secure mode, and a partially specified node spec.

Key Components:
---------------
- **NodeRole**: Closed set of node roles.
- **NodeSpec**: Resource hints, image override, node selector and storage.
- **NodeDescriptor**: Identity of the node plus its `NodeSpec`.
- **NodesConfig**: Validates a dictionary of node entries.
- **get_nodes_from_config_file**: Loads and validates nodes from a YAML file.

YAML Example:
-------------
.. code-block:: yaml

    nodes:
      es-master-1:
        cluster_name: logging
        deploy_name: es-master-1
        namespace: openshift-logging
        role: master
        secure: true
        spec:
          resources:
            limits:
              memory: 8Gi
          storage:
            volume_claim_template:
              name: data
              spec:
                storage: 50Gi
"""

from enum import Enum
from typing import Dict, Optional
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from esoperator.config import load_yaml
from esoperator.logger import logger
from esoperator.schemas.common import Resources
from esoperator.schemas.storage.storage import StorageSpec


class NodeRole(str, Enum):
    """ Functional class of an Elasticsearch cluster member. """
    MASTER = "master"
    DATA = "data"
    CLIENT = "client"
    CLIENT_DATA = "clientdata"
    CLIENT_DATA_MASTER = "clientdatamaster"

    @property
    def is_master(self) -> bool:
        return self in (NodeRole.MASTER, NodeRole.CLIENT_DATA_MASTER)

    @property
    def has_data(self) -> bool:
        return self in (NodeRole.DATA, NodeRole.CLIENT_DATA, NodeRole.CLIENT_DATA_MASTER)


class NodeSpec(BaseModel):
    """ Partially specified desired state of an Elasticsearch node. """
    resources: Resources = Field(default_factory=Resources, description="Resource requests and limits.")
    image: Optional[str] = Field(None, description="Container image overriding the default image.")
    node_selector: Optional[Dict[str, str]] = Field(None, description="Node selector of the pod.")
    storage: StorageSpec = Field(default_factory=StorageSpec, description="Storage of the node data directory.")

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("image")
    def validate_image(cls, value: Optional[str]) -> Optional[str]:
        """ Treat an empty image as no override. """
        if value is not None and not value.strip():
            return None
        return value


class NodeDescriptor(BaseModel):
    """ Elasticsearch node description. """
    cluster_name: str = Field(..., description="Name of the Elasticsearch cluster.")
    deploy_name: str = Field(..., description="Name of the deployment running the node.")
    namespace: str = Field(..., description="Kubernetes namespace of the node.")
    role: NodeRole = Field(..., description="Role of the node in the cluster.")
    secure: bool = Field(False, description="Mount the cluster certificates into the node.")
    spec: NodeSpec = Field(default_factory=NodeSpec, description="Desired state of the node.")

    model_config = ConfigDict(extra="forbid", frozen=True, str_strip_whitespace=True)

    @field_validator("cluster_name", "deploy_name", "namespace")
    def validate_not_empty(cls, value: str) -> str:
        """
        Validates that identity fields are not empty.

        Raises:
            ValueError: If the value is empty.
        """
        if not value:
            raise ValueError("must not be empty")
        return value


class NodesConfig(BaseModel):
    """
    Schema for node descriptions loaded from YAML files.

    Example usage:
        .. code-block:: python

            nodes_config = NodesConfig(**yaml_data)

    Raises:
        pydantic.ValidationError: If the input data does not conform to the expected schema.
    """

    nodes: Dict[str, NodeDescriptor] = Field(..., description="Dictionary of Elasticsearch nodes")

    @field_validator("nodes")
    def validate_unique_deploy_names(cls, value: Dict[str, NodeDescriptor]) -> Dict[str, NodeDescriptor]:
        """
        Validates that no two nodes of the same namespace share a deploy name.

        Raises:
            ValueError: If a deploy name is used twice in a namespace.
        """
        seen = set()
        for node in value.values():
            key = (node.namespace, node.deploy_name)
            if key in seen:
                raise ValueError(f"duplicate deploy name '{node.deploy_name}' in namespace '{node.namespace}'")
            seen.add(key)
        return value


def get_nodes_from_config_file(nodes_yaml_config_file: str) -> Optional[Dict[str, NodeDescriptor]]:
    """
    Load and validate node descriptions from a YAML file.

    Args:
        nodes_yaml_config_file (str): Path to the YAML file defining the nodes.

    Returns:
        Optional[Dict[str, NodeDescriptor]]: Validated node descriptions, or `None` if validation fails.

    Note:
        Validation errors are logged and `None` is returned.
    """
    cfg = load_yaml(nodes_yaml_config_file)

    try:
        nodes_cfg = NodesConfig(**cfg)
    except (ValidationError, TypeError) as err:
        logger.error(f"Provided YAML configuration file has invalid format\n{err}")
        return None

    return nodes_cfg.nodes
