"""Kubernetes client wrapper shared by the catalog and the watch streams."""

from __future__ import annotations

import logging
import threading

from kubernetes import client as k8s_client  # type: ignore[import-untyped]
from kubernetes import config as k8s_config
from kubernetes.config import ConfigException  # type: ignore[import-untyped]
from kubernetes.dynamic import DynamicClient  # type: ignore[import-untyped]

from kube_count.config import IN_CLUSTER_TOKEN_PATH, AuthMode, CountConfig
from kube_count.utils.errors import ConfigurationError

logger = logging.getLogger(__name__)


class K8sClient:
    """Holds one configured ApiClient and the API wrappers built on it.

    The configuration is passed in explicitly; nothing here touches the
    kubernetes package's process-wide default configuration.
    """

    def __init__(self, config_obj: CountConfig | None = None) -> None:
        self._config = config_obj or CountConfig()
        self._api_client: k8s_client.ApiClient | None = None
        self._core_v1: k8s_client.CoreV1Api | None = None
        self._apis: k8s_client.ApisApi | None = None
        self._dynamic_client: DynamicClient | None = None
        self._dynamic_lock = threading.Lock()

    @property
    def config(self) -> CountConfig:
        return self._config

    @property
    def is_connected(self) -> bool:
        return self._api_client is not None

    def _use_in_cluster(self) -> bool:
        if self._config.auth_mode == AuthMode.IN_CLUSTER:
            return True
        if self._config.auth_mode == AuthMode.KUBECONFIG:
            return False
        explicit = self._config.kubeconfig_path or self._config.kubeconfig_context
        return not explicit and IN_CLUSTER_TOKEN_PATH.exists()

    def connect(self) -> None:
        """Load credentials and build the API client.

        Raises:
            ConfigurationError: If no usable credentials are found.
        """
        configuration = k8s_client.Configuration()
        try:
            if self._use_in_cluster():
                logger.debug("Loading in-cluster configuration")
                k8s_config.load_incluster_config(client_configuration=configuration)
            else:
                path = self._config.effective_kubeconfig_path
                logger.debug(f"Loading kubeconfig from {path or 'default location'}")
                k8s_config.load_kube_config(
                    config_file=str(path) if path else None,
                    context=self._config.kubeconfig_context,
                    client_configuration=configuration,
                )
        except (ConfigException, FileNotFoundError) as e:
            raise ConfigurationError(f"Failed to load cluster credentials: {e}") from e

        # Every watch holds a connection open for its whole lifetime.
        configuration.connection_pool_maxsize = self._config.connection_pool_maxsize

        self._api_client = k8s_client.ApiClient(configuration)
        logger.info(f"Connected to {configuration.host}")

    def disconnect(self) -> None:
        """Close the underlying connection pool."""
        if self._api_client is not None:
            self._api_client.close()
        self._api_client = None
        self._core_v1 = None
        self._apis = None
        self._dynamic_client = None

    @property
    def api_client(self) -> k8s_client.ApiClient:
        if self._api_client is None:
            raise RuntimeError("K8s client not connected. Call connect() first.")
        return self._api_client

    @property
    def core_v1(self) -> k8s_client.CoreV1Api:
        if self._core_v1 is None:
            self._core_v1 = k8s_client.CoreV1Api(self.api_client)
        return self._core_v1

    @property
    def apis(self) -> k8s_client.ApisApi:
        if self._apis is None:
            self._apis = k8s_client.ApisApi(self.api_client)
        return self._apis

    @property
    def dynamic(self) -> DynamicClient:
        """Dynamic client, created on first use since it performs discovery."""
        with self._dynamic_lock:
            if self._dynamic_client is None:
                self._dynamic_client = DynamicClient(self.api_client)
            return self._dynamic_client
