import unittest
from unittest.mock import patch
from kubernetes.config.config_exception import ConfigException
from esoperator.exceptions import KubeAccessError
from esoperator.kube.kube_access_layer import KubeAccessLayer


class TestKubeAccessLayer(unittest.TestCase):
    """
    Unit tests for class KubeAccessLayer
    """

    def test_core_api_before_connect(self):
        """ Test core_api raises before connect is called """
        with self.assertRaises(KubeAccessError):
            KubeAccessLayer().core_api()

    @patch("esoperator.kube.kube_access_layer.client.CoreV1Api")
    @patch("esoperator.kube.kube_access_layer.kube_config")
    def test_connect_in_cluster(self, mock_kube_config, mock_core_api):
        """ Test in-cluster configuration is preferred """
        kal = KubeAccessLayer()
        kal.connect()

        mock_kube_config.load_incluster_config.assert_called_once()
        mock_kube_config.load_kube_config.assert_not_called()
        self.assertIsNone(kal.context)
        self.assertIs(kal.core_api(), mock_core_api.return_value)

    @patch("esoperator.kube.kube_access_layer.config")
    @patch("esoperator.kube.kube_access_layer.client.CoreV1Api")
    @patch("esoperator.kube.kube_access_layer.kube_config")
    def test_connect_kubeconfig(self, mock_kube_config, mock_core_api, mock_config):
        """ Test the kubeconfig context is used outside a cluster """
        mock_kube_config.load_incluster_config.side_effect = ConfigException("not in cluster")
        mock_config.KUBE_CONTEXT = "kind-logging"

        kal = KubeAccessLayer()
        kal.connect()

        mock_kube_config.load_kube_config.assert_called_once_with(context="kind-logging")
        self.assertEqual(kal.context, "kind-logging")
        self.assertIs(kal.core_api(), mock_core_api.return_value)

    @patch("esoperator.kube.kube_access_layer.config")
    @patch("esoperator.kube.kube_access_layer.kube_config")
    def test_connect_without_configuration(self, mock_kube_config, mock_config):
        """ Test connect raises KubeAccessError when no configuration is found """
        mock_kube_config.load_incluster_config.side_effect = ConfigException("not in cluster")
        mock_kube_config.load_kube_config.side_effect = ConfigException("no kubeconfig")
        mock_config.KUBE_CONTEXT = None

        kal = KubeAccessLayer()
        with self.assertRaises(KubeAccessError):
            kal.connect()
        mock_kube_config.load_kube_config.assert_called_once_with(context=None)
        with self.assertRaises(KubeAccessError):
            kal.core_api()
