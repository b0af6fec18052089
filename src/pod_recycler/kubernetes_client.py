import os
import logging
from typing import Any, Dict, Iterator, Optional
from kubernetes import client, config, watch
from kubernetes.client.rest import ApiException
from kubernetes.config.config_exception import ConfigException
from urllib3.exceptions import HTTPError

from .errors import ConfigurationError, WatchError

logger = logging.getLogger(__name__)


def load_kubernetes_config(kube_config_path: Optional[str] = None) -> None:
    """Resolve credentials: explicit kubeconfig file, else in-cluster identity.

    Raises ConfigurationError when neither yields a usable identity.
    """
    if kube_config_path:
        # KUBECONFIG may list several files; the client merges the ones present
        paths = [p for p in kube_config_path.split(os.pathsep) if p]
        if not any(os.path.exists(p) for p in paths):
            raise ConfigurationError(f"kubeconfig file not found: {kube_config_path}")
        try:
            config.load_kube_config(config_file=kube_config_path)
        except (ConfigException, OSError, ValueError) as e:
            raise ConfigurationError(f"invalid kubeconfig {kube_config_path}: {e}") from e
        logger.info(f"Loaded kubeconfig from: {kube_config_path}")
        return

    try:
        config.load_incluster_config()
    except ConfigException as e:
        raise ConfigurationError(
            f"no kubeconfig given and in-cluster configuration unavailable: {e}"
        ) from e
    logger.info("Loaded in-cluster Kubernetes configuration")


class KubernetesClient:
    """The two pod operations the recycler needs: watch all, delete one"""

    def __init__(self, kube_config_path: Optional[str] = None, core_api=None):
        if core_api is not None:
            self.v1 = core_api
            return

        load_kubernetes_config(kube_config_path)
        self.v1 = client.CoreV1Api()

    def watch_pods(self) -> Iterator[Dict[str, Any]]:
        """Stream watch events for every pod in every namespace, no selector.

        The generator ends when the API server closes the stream.  Transport
        and API errors, including a 410 Gone ERROR event and pods the client
        fails to deserialize, raise WatchError.
        """
        watcher = watch.Watch()
        try:
            yield from watcher.stream(self.v1.list_pod_for_all_namespaces)
        except (ApiException, HTTPError, OSError, ValueError) as e:
            raise WatchError(f"pod watch failed: {e}") from e
        finally:
            watcher.stop()

    def delete_pod(self, name, namespace, grace_period_seconds=0):
        """Delete a pod, bypassing graceful termination by default.

        Errors from the API server propagate to the caller.
        """
        self.v1.delete_namespaced_pod(
            name=name,
            namespace=namespace,
            grace_period_seconds=grace_period_seconds,
            body=client.V1DeleteOptions(grace_period_seconds=grace_period_seconds)
        )
