""" Health-check probe and scheduling affinity of Elasticsearch nodes. """

from kubernetes.client import (
    V1Affinity,
    V1LabelSelector,
    V1LabelSelectorRequirement,
    V1PodAffinityTerm,
    V1PodAntiAffinity,
    V1Probe,
    V1TCPSocketAction,
    V1WeightedPodAffinityTerm,
)
import esoperator.config as config
from esoperator.schemas.nodes import NodeRole


def readiness_probe() -> V1Probe:
    """
    Probe used for both readiness and liveness of a node.

    The probe only checks that the cluster transport port accepts TCP
    connections; it does not query the cluster health.

    Returns:
        V1Probe: TCP probe on the cluster transport port.
    """
    return V1Probe(
        tcp_socket=V1TCPSocketAction(port=config.CLUSTER_TRANSPORT_PORT),
        initial_delay_seconds=config.PROBE_INITIAL_DELAY_SECONDS,
        timeout_seconds=config.PROBE_TIMEOUT_SECONDS,
        failure_threshold=config.PROBE_FAILURE_THRESHOLD,
    )


def anti_affinity(role: NodeRole) -> V1Affinity:
    """
    Soft anti-affinity spreading nodes of the same role over hosts.

    Args:
        role (NodeRole): Role of the node, matched against the `role` pod label.

    Returns:
        V1Affinity: Affinity with one preferred pod anti-affinity term.
    """
    return V1Affinity(
        pod_anti_affinity=V1PodAntiAffinity(
            preferred_during_scheduling_ignored_during_execution=[
                V1WeightedPodAffinityTerm(
                    weight=config.ANTI_AFFINITY_WEIGHT,
                    pod_affinity_term=V1PodAffinityTerm(
                        label_selector=V1LabelSelector(
                            match_expressions=[
                                V1LabelSelectorRequirement(key="role", operator="In", values=[role.value]),
                            ]
                        ),
                        topology_key=config.ANTI_AFFINITY_TOPOLOGY_KEY,
                    ),
                ),
            ]
        )
    )
