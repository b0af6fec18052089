"""
Exception hierarchy for Pod Recycler
"""


class PodRecyclerError(Exception):
    """Base class for all Pod Recycler errors"""


class ConfigurationError(PodRecyclerError):
    """Kubernetes credentials could not be resolved"""


class WatchError(PodRecyclerError):
    """Opening or reading the pod watch stream failed"""


class RemediationError(PodRecyclerError):
    """Force-deleting a pod failed"""

    def __init__(self, namespace: str, name: str, cause: Exception):
        self.namespace = namespace
        self.name = name
        self.cause = cause
        super().__init__(f"delete failed for pod {namespace}/{name}: {cause}")
