"""
Environment contract of the Elasticsearch container.

The runtime of the node image reads its cluster settings from environment
variables. The order of the entries is fixed so that rendered pod specs can be
compared textually between reconciliation passes.
"""

from typing import List
from kubernetes.client import V1EnvVar, V1EnvVarSource, V1ObjectFieldSelector
import esoperator.config as config
from esoperator.resolvers.resources import ResolvedResources
from esoperator.schemas.nodes import NodeDescriptor


def _flag(value: bool) -> str:
    return "true" if value else "false"


class EnvironmentComposer:
    """ Builds the ordered environment of an Elasticsearch container. """

    def compose(self, descriptor: NodeDescriptor, resources: ResolvedResources) -> List[V1EnvVar]:
        """
        Compose the environment of a node.

        Args:
            descriptor (NodeDescriptor): Node to compose the environment for.
            resources (ResolvedResources): Resolved resources of the node.

        Returns:
            List[V1EnvVar]: Environment entries in their fixed order.
        """
        cluster = descriptor.cluster_name
        return [
            V1EnvVar(name="DC_NAME", value=descriptor.deploy_name),
            V1EnvVar(
                name="NAMESPACE",
                value_from=V1EnvVarSource(field_ref=V1ObjectFieldSelector(field_path="metadata.namespace")),
            ),
            V1EnvVar(name="KUBERNETES_TRUST_CERT", value="true"),
            V1EnvVar(name="SERVICE_DNS", value=f"{cluster}-cluster"),
            V1EnvVar(name="CLUSTER_NAME", value=cluster),
            V1EnvVar(name="INSTANCE_RAM", value=resources.instance_ram),
            V1EnvVar(name="HEAP_DUMP_LOCATION", value=config.HEAP_DUMP_LOCATION),
            V1EnvVar(name="NODE_QUORUM", value=str(config.NODE_QUORUM)),
            V1EnvVar(name="RECOVER_EXPECTED_NODES", value=str(config.RECOVER_EXPECTED_NODES)),
            V1EnvVar(name="RECOVER_AFTER_TIME", value=str(config.RECOVER_AFTER_TIME)),
            # must match the timeout of the readiness probe
            V1EnvVar(name="READINESS_PROBE_TIMEOUT", value=str(config.PROBE_TIMEOUT_SECONDS)),
            V1EnvVar(name="POD_LABEL", value=f"cluster={cluster}"),
            V1EnvVar(name="IS_MASTER", value=_flag(descriptor.role.is_master)),
            V1EnvVar(name="HAS_DATA", value=_flag(descriptor.role.has_data)),
            V1EnvVar(name="PROMETHEUS_USER", value=config.PROMETHEUS_USER),
            V1EnvVar(name="PRIMARY_SHARDS", value=str(config.PRIMARY_SHARDS)),
            V1EnvVar(name="REPLICA_SHARDS", value=str(config.REPLICA_SHARDS)),
        ]
