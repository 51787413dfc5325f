""" Kubernetes Access Layer. """

from kubernetes import client, config as kube_config
from kubernetes.config.config_exception import ConfigException
from typing import Optional
import esoperator.config as config
from esoperator.exceptions import KubeAccessError
from esoperator.logger import logger


class KubeAccessLayer:
    """
    Kubernetes Access Layer (KAL) for interfacing with the Kubernetes API server.

    Holds the API clients used by esoperator. In-cluster configuration is
    preferred; outside a cluster the local kubeconfig is used.
    """

    def __init__(self) -> None:
        """
        Initializes the KubeAccessLayer with empty connection state.

        Attributes:
            core_v1 (Optional[client.CoreV1Api]): Client of the core/v1 API group.
            context (Optional[str]): kubeconfig context in use, None when running in-cluster.
        """
        self.core_v1: Optional[client.CoreV1Api] = None
        self.context: Optional[str] = None

    def connect(self) -> None:
        """
        Connects to the Kubernetes API server.

        Tries the in-cluster service account first, then the kubeconfig context
        named by `KUBE_CONTEXT` (or the current context when unset).

        Raises:
            KubeAccessError: If no usable Kubernetes configuration is found.
        """
        try:
            kube_config.load_incluster_config()
            self.context = None
        except ConfigException:
            try:
                kube_config.load_kube_config(context=config.KUBE_CONTEXT or None)
            except ConfigException as err:
                raise KubeAccessError(f"Could not load a Kubernetes configuration: {err}") from err
            self.context = config.KUBE_CONTEXT or "current-context"
            logger.info(f"Using kubeconfig context {self.context}")
        self.core_v1 = client.CoreV1Api()

    def core_api(self) -> client.CoreV1Api:
        """
        Return the core/v1 API client.

        Raises:
            KubeAccessError: If :meth:`connect` was not called.
        """
        if self.core_v1 is None:
            raise KubeAccessError("Not connected to a Kubernetes cluster")
        return self.core_v1


kal = KubeAccessLayer()
