import json
import unittest
from unittest.mock import patch, MagicMock
from kubernetes.client import V1PersistentVolumeClaim, V1PersistentVolumeClaimSpec, V1VolumeResourceRequirements
from esoperator.exceptions import ClaimProvisioningError, StorageConfigurationError
from esoperator.kube.claim_store import ClaimStore, DryRunClaimStore, KubeClaimStore
from esoperator.node_resolver import NodeResolver, node_selector, pod_labels, resolve_nodes
from esoperator.schemas.nodes import NodeDescriptor


def make_descriptor(**kwargs):
    data = {
        "cluster_name": "logging",
        "deploy_name": "es-node-1",
        "namespace": "openshift-logging",
        "role": "master",
        "spec": {"storage": {"volume_claim_template": {"name": "data", "spec": {"storage": "50Gi"}}}},
    }
    data.update(kwargs)
    return NodeDescriptor(**data)


class TestNodeResolver(unittest.TestCase):
    """
    Unit tests for class NodeResolver
    """

    def setUp(self):
        self.store = MagicMock(spec=ClaimStore)
        self.resolver = NodeResolver(self.store)

    def test_default_master(self):
        """ Test an empty spec master node without security """
        resolution = self.resolver.resolve(make_descriptor(spec={}))

        container = resolution.container
        self.assertEqual(container.resources.limits, {"cpu": "4000m", "memory": "4Gi"})
        self.assertEqual(container.resources.requests, {"cpu": "100m", "memory": "1Gi"})
        self.assertEqual({e.name: e.value for e in container.env}["INSTANCE_RAM"], "4Gi")
        self.assertEqual([m.name for m in container.volume_mounts], ["elasticsearch-storage", "elasticsearch-config"])
        self.assertEqual([v.name for v in resolution.volumes], ["elasticsearch-storage", "elasticsearch-config"])
        self.assertIsNone(resolution.node_selector)

    def test_secure_node_with_memory_limit(self):
        """ Test a secure node with an 8Gi memory limit """
        resolution = self.resolver.resolve(make_descriptor(
            secure=True,
            spec={"resources": {"limits": {"memory": "8Gi"}}, "storage": {"empty_dir": {}}},
        ))

        container = resolution.container
        self.assertEqual(container.resources.limits["memory"], "8Gi")
        self.assertEqual({e.name: e.value for e in container.env}["INSTANCE_RAM"], "8Gi")
        mounts = {m.name: m.mount_path for m in container.volume_mounts}
        self.assertEqual(mounts["certificates"], "/etc/elasticsearch/secret")
        secrets = [v.secret.secret_name for v in resolution.volumes if v.secret is not None]
        self.assertEqual(secrets, ["logging-certs"])

    def test_mounts_match_volumes(self):
        """ Test volumes and mounts correspond one to one, for both security modes """
        for secure in (False, True):
            with self.subTest(secure=secure):
                resolution = self.resolver.resolve(make_descriptor(secure=secure))
                self.assertEqual(
                    [v.name for v in resolution.volumes],
                    [m.name for m in resolution.container.volume_mounts],
                )

    def test_claim_template_upserted_once(self):
        """ Test the claim of a claim template is upserted exactly once """
        resolution = self.resolver.resolve(make_descriptor())

        self.store.create_or_update_persistent_volume_claim.assert_called_once()
        self.assertEqual(self.store.create_or_update_persistent_volume_claim.call_args[0][1], "data-es-node-1")
        self.assertEqual(resolution.volumes[0].persistent_volume_claim.claim_name, "data-es-node-1")

    def test_provisioning_failure_does_not_abort(self):
        """ Test a failing claim upsert is recorded and resolution completes """
        self.store.create_or_update_persistent_volume_claim.side_effect = ClaimProvisioningError("timeout")

        resolution = self.resolver.resolve(make_descriptor())

        self.assertTrue(resolution.diagnostics.has_errors())
        self.assertEqual(resolution.volumes[0].persistent_volume_claim.claim_name, "data-es-node-1")

    def test_no_storage_is_not_fatal(self):
        """ Test a node without storage resolves with a warning """
        resolution = self.resolver.resolve(make_descriptor(spec={}))

        levels = [d.level for d in resolution.diagnostics]
        self.assertIn("warning", levels)
        self.assertIsNone(resolution.volumes[0].persistent_volume_claim)
        self.assertIsNone(resolution.volumes[0].host_path)
        self.assertIsNone(resolution.volumes[0].empty_dir)

    @patch("esoperator.node_resolver.config")
    def test_no_storage_strict(self, mock_config):
        """ Test strict storage mode rejects nodes without storage """
        mock_config.STRICT_STORAGE = True

        with self.assertRaises(StorageConfigurationError):
            self.resolver.resolve(make_descriptor(spec={}))
        self.resolver.resolve(make_descriptor())

    def test_idempotent(self):
        """ Test resolving the same node twice gives identical artifacts """
        descriptor = make_descriptor(secure=True, spec={
            "node_selector": {"disk": "ssd"},
            "storage": {"volume_claim_template": {"name": "data", "spec": {"storage": "50Gi"}}},
        })

        first = self.resolver.resolve(descriptor)
        second = self.resolver.resolve(descriptor)

        self.assertEqual(first.container, second.container)
        self.assertEqual(first.volumes, second.volumes)
        self.assertEqual(first.affinity, second.affinity)
        self.assertEqual(json.dumps(first.to_dict()), json.dumps(second.to_dict()))

    def test_affinity_and_labels(self):
        """ Test the affinity targets the role label set on the pod """
        resolution = self.resolver.resolve(make_descriptor(role="data"))

        term = resolution.affinity.pod_anti_affinity.preferred_during_scheduling_ignored_during_execution[0]
        self.assertEqual(term.pod_affinity_term.label_selector.match_expressions[0].values, ["data"])
        self.assertEqual(resolution.labels, {"cluster": "logging", "role": "data"})

    def test_pod_spec(self):
        """ Test the pod spec aggregates the resolved artifacts """
        resolution = self.resolver.resolve(make_descriptor(spec={"node_selector": {"disk": "ssd"}}))
        pod_spec = resolution.pod_spec()

        self.assertEqual(pod_spec.containers, [resolution.container])
        self.assertEqual(pod_spec.volumes, resolution.volumes)
        self.assertEqual(pod_spec.node_selector, {"disk": "ssd"})
        self.assertIs(pod_spec.affinity, resolution.affinity)

    def test_to_dict(self):
        """ Test the dictionary rendering uses the API field names """
        rendered = self.resolver.resolve(make_descriptor()).to_dict()

        self.assertEqual(rendered["name"], "es-node-1")
        self.assertEqual(rendered["namespace"], "openshift-logging")
        container = rendered["spec"]["containers"][0]
        self.assertEqual(container["imagePullPolicy"], "Always")
        self.assertEqual(container["readinessProbe"]["tcpSocket"]["port"], 9300)
        self.assertEqual(rendered["spec"]["volumes"][0]["persistentVolumeClaim"]["claimName"], "data-es-node-1")
        self.assertNotIn("nodeSelector", rendered["spec"])


class TestNodeHelpers(unittest.TestCase):
    """
    Unit tests for node_selector and pod_labels
    """

    def test_node_selector(self):
        """ Test an empty node selector is rendered as None """
        self.assertIsNone(node_selector(make_descriptor(spec={"node_selector": {}})))
        self.assertIsNone(node_selector(make_descriptor(spec={})))
        self.assertEqual(node_selector(make_descriptor(spec={"node_selector": {"a": "b"}})), {"a": "b"})

    def test_pod_labels(self):
        """ Test pod labels carry the cluster and role """
        self.assertEqual(pod_labels(make_descriptor()), {"cluster": "logging", "role": "master"})


class TestResolveNodes(unittest.TestCase):
    """
    Unit tests for resolve_nodes
    """

    @patch("esoperator.node_resolver.logger")
    def test_resolves_all_nodes(self, mock_logger):
        """ Test every node is resolved and its diagnostics are logged """
        store = DryRunClaimStore()
        nodes = {
            "a": make_descriptor(deploy_name="es-a"),
            "b": make_descriptor(deploy_name="es-b"),
        }

        resolutions = resolve_nodes(nodes, store)

        self.assertEqual(set(resolutions), {"a", "b"})
        self.assertEqual([c.metadata.name for c in store.claims], ["data-es-a", "data-es-b"])
        self.assertTrue(mock_logger.log.called)

    @patch("esoperator.node_resolver.logger")
    @patch("esoperator.node_resolver.config")
    def test_failing_node_does_not_block_siblings(self, mock_config, mock_logger):
        """ Test a node failing to resolve is skipped and logged """
        mock_config.STRICT_STORAGE = True
        nodes = {
            "broken": make_descriptor(deploy_name="es-broken", spec={}),
            "ok": make_descriptor(deploy_name="es-ok"),
        }

        resolutions = resolve_nodes(nodes, DryRunClaimStore())

        self.assertEqual(list(resolutions), ["ok"])
        mock_logger.error.assert_called_once()
        self.assertIn("broken", mock_logger.error.call_args[0][0])

    @patch("esoperator.node_resolver.logger")
    @patch("esoperator.kube.claim_store.kal")
    def test_malformed_existing_claim_does_not_block_siblings(self, mock_kal, mock_logger):
        """ Test a claim with a malformed size on the cluster only affects its own node """
        api = MagicMock()
        mock_kal.core_api.return_value = api

        def read_claim(name, namespace, **kwargs):
            size = "fifty" if name == "data-es-bad" else "50Gi"
            return V1PersistentVolumeClaim(spec=V1PersistentVolumeClaimSpec(
                resources=V1VolumeResourceRequirements(requests={"storage": size})
            ))

        api.read_namespaced_persistent_volume_claim.side_effect = read_claim
        nodes = {
            "bad": make_descriptor(deploy_name="es-bad"),
            "ok": make_descriptor(deploy_name="es-ok"),
        }

        resolutions = resolve_nodes(nodes, KubeClaimStore())

        self.assertEqual(set(resolutions), {"bad", "ok"})
        self.assertTrue(resolutions["bad"].diagnostics.has_errors())
        self.assertFalse(resolutions["ok"].diagnostics.has_errors())
        self.assertEqual(resolutions["bad"].volumes[0].persistent_volume_claim.claim_name, "data-es-bad")
        api.patch_namespaced_persistent_volume_claim.assert_not_called()
